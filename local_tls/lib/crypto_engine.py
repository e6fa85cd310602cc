"""Crypto engine capability interface and its in-process implementation."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .cert_utils import (
    deserialize_csr,
    deserialize_private_key,
    generate_private_key,
    resolve_digest,
    serialize_certificate,
    serialize_csr,
    serialize_private_key,
)
from .certificate_builder import CertificateBuilder
from .errors import EngineFailure


class CryptoEngine(ABC):
    """Performs the three cryptographic operations of the artifact lifecycle.

    All inputs and outputs are PEM bytes so the lifecycle code never
    handles key objects directly. Implementations raise EngineFailure
    when they reject an operation.
    """

    @abstractmethod
    def generate_key(self, curve: str) -> bytes:
        """Generate an EC private key and return it as PEM."""

    @abstractmethod
    def build_csr(
        self,
        common_name: str,
        san_dns_names: Sequence[str],
        key_pem: bytes,
        digest: str,
    ) -> bytes:
        """Build a CSR signed by key_pem and return it as PEM."""

    @abstractmethod
    def self_sign(
        self,
        csr_pem: bytes,
        key_pem: bytes,
        validity_days: int,
        digest: str,
    ) -> bytes:
        """Self-sign csr_pem with key_pem and return the certificate as PEM."""


class CryptographyEngine(CryptoEngine):
    """CryptoEngine backed by the cryptography package, run in-process."""

    def generate_key(self, curve: str) -> bytes:
        try:
            return serialize_private_key(generate_private_key(curve))
        except Exception as e:
            raise EngineFailure(f"key generation failed: {e}") from e

    def build_csr(
        self,
        common_name: str,
        san_dns_names: Sequence[str],
        key_pem: bytes,
        digest: str,
    ) -> bytes:
        try:
            csr = CertificateBuilder.build_request(
                common_name=common_name,
                san_dns_names=list(san_dns_names),
                private_key=deserialize_private_key(key_pem),
                digest=resolve_digest(digest),
            )
            return serialize_csr(csr)
        except Exception as e:
            raise EngineFailure(f"CSR generation failed: {e}") from e

    def self_sign(
        self,
        csr_pem: bytes,
        key_pem: bytes,
        validity_days: int,
        digest: str,
    ) -> bytes:
        try:
            cert = CertificateBuilder.build_self_signed(
                csr=deserialize_csr(csr_pem),
                private_key=deserialize_private_key(key_pem),
                validity_days=validity_days,
                digest=resolve_digest(digest),
            )
            return serialize_certificate(cert)
        except Exception as e:
            raise EngineFailure(f"self-signing failed: {e}") from e
