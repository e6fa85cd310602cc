"""Certificate signing request generation."""

from .artifact_store import ArtifactStore
from .crypto_engine import CryptoEngine
from .errors import MissingKeyError, UsageError
from .logging_config import LOGGER
from .models import ArtifactKind, RequestResult


class RequestBuilder:
    """Produces the CSR artifact for one domain, gated on an existing key."""

    def __init__(self, store: ArtifactStore, engine: CryptoEngine) -> None:
        self.store = store
        self.engine = engine

    def build(self, domain: str) -> RequestResult:
        """Build a CSR with CN=domain and SAN=DNS:domain, signed by the existing key.

        The domain is used verbatim; it is not checked for hostname syntax.
        X.509 caps the CN at 64 characters, so a longer domain is rejected by
        the engine (EngineFailure), as OpenSSL would reject it too.
        Any existing CSR is overwritten.

        Args:
            domain: Non-empty domain name for CN and the single SAN entry

        Returns:
            RequestResult with CSR path, common name, and SAN DNS names

        Raises:
            UsageError: If domain is empty
            MissingKeyError: If no private key exists; nothing is written
            EngineFailure: If the engine fails or the CSR cannot be written
        """
        if not domain:
            raise UsageError("domain is required")

        if not self.store.exists(ArtifactKind.KEY):
            raise MissingKeyError(self.store.path(ArtifactKind.KEY))

        config = self.store.config
        san_dns_names = [domain]

        csr_pem = self.engine.build_csr(
            common_name=domain,
            san_dns_names=san_dns_names,
            key_pem=self.store.read(ArtifactKind.KEY),
            digest=config.digest,
        )
        csr_path = self.store.write(ArtifactKind.REQUEST, csr_pem, overwrite=config.overwrite)
        LOGGER.info("Certificate signing request written: %s (CN=%s)", csr_path, domain)

        return RequestResult(csr_path=csr_path, common_name=domain, san_dns_names=san_dns_names)
