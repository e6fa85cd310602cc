"""Certificate utility functions for key generation, serialization, and metadata extraction."""

import uuid

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey

CURVES: dict[str, type[ec.EllipticCurve]] = {
    "secp256r1": ec.SECP256R1,
    "secp384r1": ec.SECP384R1,
    "secp521r1": ec.SECP521R1,
}

DIGESTS: dict[str, type[hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


def resolve_curve(name: str) -> ec.EllipticCurve:
    """Return curve instance for a curve name such as 'secp384r1'."""
    try:
        return CURVES[name.lower()]()
    except KeyError:
        raise ValueError(f"unsupported curve: {name}") from None


def resolve_digest(name: str) -> hashes.HashAlgorithm:
    """Return hash algorithm instance for a digest name such as 'sha256'."""
    try:
        return DIGESTS[name.lower()]()
    except KeyError:
        raise ValueError(f"unsupported digest: {name}") from None


def generate_private_key(curve: str = "secp384r1") -> EllipticCurvePrivateKey:
    """Generate EC private key on the named curve."""
    return ec.generate_private_key(resolve_curve(curve))


def serialize_private_key(key: EllipticCurvePrivateKey) -> bytes:
    """Serialize private key to PEM format (PKCS8, no encryption)."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def deserialize_private_key(pem_data: bytes) -> EllipticCurvePrivateKey:
    """Deserialize private key from PEM bytes."""
    key = serialization.load_pem_private_key(pem_data, password=None)
    if not isinstance(key, EllipticCurvePrivateKey):
        raise ValueError("expected EC private key")
    return key


def serialize_certificate(cert: x509.Certificate) -> bytes:
    """Serialize certificate to PEM format."""
    return cert.public_bytes(serialization.Encoding.PEM)


def deserialize_certificate(pem_data: bytes) -> x509.Certificate:
    """Deserialize certificate from PEM bytes."""
    return x509.load_pem_x509_certificate(pem_data)


def serialize_csr(csr: x509.CertificateSigningRequest) -> bytes:
    """Serialize CSR to PEM format."""
    return csr.public_bytes(serialization.Encoding.PEM)


def deserialize_csr(pem_data: bytes) -> x509.CertificateSigningRequest:
    """Deserialize CSR from PEM bytes."""
    return x509.load_pem_x509_csr(pem_data)


def generate_serial_number() -> int:
    """Generate certificate serial number from UUID4.

    UUID v4 gives 128-bit values with ~122 bits of entropy, above the
    64-bit CSPRNG minimum of the CA/Browser Forum baseline requirements.

    Returns:
        Integer serial number for x509.CertificateBuilder.serial_number()
    """
    return uuid.uuid4().int


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def get_common_name(subject: x509.Name) -> str:
    """Return the first Common Name of an X.509 name.

    Raises:
        ValueError: If the name has no string CN
    """
    attributes = subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)
    if not attributes:
        raise ValueError("name has no CN")
    cn = attributes[0].value
    if not isinstance(cn, str):
        raise ValueError("CN must be string")
    return cn


def get_san_dns_names(obj: x509.Certificate | x509.CertificateSigningRequest) -> list[str]:
    """Return DNS names from the SubjectAlternativeName extension, or [] if absent."""
    try:
        san = obj.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        return []
    return san.get_values_for_type(x509.DNSName)


def validate_csr_signature(csr: x509.CertificateSigningRequest) -> bool:
    """Verify CSR self-signature to prove private key possession."""
    try:
        return csr.is_signature_valid
    except Exception:
        return False


def public_key_matches(
    private_key: EllipticCurvePrivateKey,
    obj: x509.Certificate | x509.CertificateSigningRequest,
) -> bool:
    """Return True if the certificate or CSR carries the public half of private_key."""
    spki = serialization.PublicFormat.SubjectPublicKeyInfo
    expected = private_key.public_key().public_bytes(serialization.Encoding.DER, spki)
    actual = obj.public_key().public_bytes(serialization.Encoding.DER, spki)
    return expected == actual
