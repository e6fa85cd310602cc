"""Certificate builder for CSR and self-signed X.509 construction."""

from datetime import UTC, datetime, timedelta

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from .cert_utils import generate_serial_number, public_key_matches, validate_csr_signature


class CertificateBuilder:
    """Builds the CSR and the self-signed certificate of a single TLS identity."""

    @staticmethod
    def build_request(
        common_name: str,
        san_dns_names: list[str],
        private_key: EllipticCurvePrivateKey,
        digest: hashes.HashAlgorithm,
    ) -> x509.CertificateSigningRequest:
        """Build CSR with CN and a SubjectAlternativeName of DNS names.

        Args:
            common_name: Subject Common Name, accepted verbatim
            san_dns_names: DNS names for the SAN extension
            private_key: Key that signs the request
            digest: Signature hash algorithm

        Returns:
            Signed certificate signing request
        """
        subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])

        builder = x509.CertificateSigningRequestBuilder().subject_name(subject)
        if san_dns_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(name) for name in san_dns_names]),
                critical=False,
            )

        return builder.sign(private_key, digest)

    @staticmethod
    def build_self_signed(
        csr: x509.CertificateSigningRequest,
        private_key: EllipticCurvePrivateKey,
        validity_days: int,
        digest: hashes.HashAlgorithm,
    ) -> x509.Certificate:
        """Build self-signed certificate from CSR, signed by the CSR's own key.

        Issuer and subject are both the CSR subject. The SAN extension of the
        CSR is carried over so browsers accept the certificate.

        Args:
            csr: Certificate signing request to self-sign
            private_key: Private key matching the CSR public key
            validity_days: Certificate validity period in days
            digest: Signature hash algorithm

        Returns:
            End-entity X.509 certificate

        Raises:
            ValueError: If CSR signature is invalid or the key does not match the CSR
        """
        if not validate_csr_signature(csr):
            raise ValueError("CSR signature validation failed")
        if not public_key_matches(private_key, csr):
            raise ValueError("private key does not match CSR public key")

        not_before = datetime.now(UTC)
        not_after = not_before + timedelta(days=validity_days)

        builder = (
            x509.CertificateBuilder()
            .subject_name(csr.subject)
            .issuer_name(csr.subject)
            .public_key(private_key.public_key())
            .serial_number(generate_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .add_extension(
                x509.BasicConstraints(ca=False, path_length=None),
                critical=True,
            )
            .add_extension(
                x509.KeyUsage(
                    digital_signature=True,
                    content_commitment=False,
                    key_encipherment=False,
                    data_encipherment=False,
                    key_agreement=False,
                    key_cert_sign=False,
                    crl_sign=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(
                x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]),
                critical=False,
            )
        )

        try:
            san = csr.extensions.get_extension_for_class(x509.SubjectAlternativeName)
        except x509.ExtensionNotFound:
            san = None
        if san is not None:
            builder = builder.add_extension(san.value, critical=san.critical)

        return builder.sign(private_key, digest)
