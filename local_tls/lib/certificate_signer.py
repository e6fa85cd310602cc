"""Self-signed certificate generation."""

from .artifact_store import ArtifactStore
from .cert_utils import deserialize_certificate, get_certificate_serial_hex, get_common_name
from .crypto_engine import CryptoEngine
from .errors import MissingKeyError, MissingRequestError
from .logging_config import LOGGER
from .models import ArtifactKind, CertificateResult


class CertificateSigner:
    """Produces the self-signed certificate from the existing key and CSR."""

    def __init__(self, store: ArtifactStore, engine: CryptoEngine) -> None:
        self.store = store
        self.engine = engine

    def sign(self) -> CertificateResult:
        """Self-sign the existing CSR with the existing key.

        Preconditions are checked in order (key, then CSR) and either failure
        returns before the engine is called, so no certificate is written.

        Returns:
            CertificateResult with path, CN, serial, and validity window

        Raises:
            MissingKeyError: If no private key exists
            MissingRequestError: If no CSR exists
            EngineFailure: If the engine rejects the pair or the certificate cannot be written
        """
        if not self.store.exists(ArtifactKind.KEY):
            raise MissingKeyError(self.store.path(ArtifactKind.KEY))
        if not self.store.exists(ArtifactKind.REQUEST):
            raise MissingRequestError(self.store.path(ArtifactKind.REQUEST))

        config = self.store.config
        cert_pem = self.engine.self_sign(
            csr_pem=self.store.read(ArtifactKind.REQUEST),
            key_pem=self.store.read(ArtifactKind.KEY),
            validity_days=config.validity_days,
            digest=config.digest,
        )
        cert_path = self.store.write(ArtifactKind.CERTIFICATE, cert_pem, overwrite=config.overwrite)

        cert = deserialize_certificate(cert_pem)
        result = CertificateResult(
            cert_path=cert_path,
            common_name=get_common_name(cert.subject),
            serial_number=get_certificate_serial_hex(cert),
            not_valid_before=cert.not_valid_before_utc,
            not_valid_after=cert.not_valid_after_utc,
        )
        LOGGER.info(
            "Self-signed certificate written: %s (CN=%s, expires %s)",
            cert_path,
            result.common_name,
            result.not_valid_after.isoformat(),
        )
        return result
