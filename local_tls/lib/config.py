"""TLS artifact configuration dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass
class TLSConfig:
    """Configuration for a single TLS identity directory."""

    target_dir: Path = Path(".")
    curve: str = "secp384r1"
    digest: str = "sha256"
    validity_days: int = 365
    overwrite: bool = True
    key_filename: str = "tls.key"
    request_filename: str = "tls.csr"
    certificate_filename: str = "tls.crt"

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "TLSConfig":
        """Build config from an environment mapping.

        Args:
            environ: Mapping such as os.environ; only TARGET_DIR is consulted

        Returns:
            TLSConfig with target_dir from TARGET_DIR, or the current directory if unset
        """
        target_dir = environ.get("TARGET_DIR") or "."
        return cls(target_dir=Path(target_dir))
