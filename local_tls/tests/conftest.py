"""Test fixtures for local_tls tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey

from local_tls.lib.artifact_store import ArtifactStore
from local_tls.lib.cert_utils import generate_private_key, serialize_private_key
from local_tls.lib.config import TLSConfig
from local_tls.lib.crypto_engine import CryptographyEngine
from local_tls.lib.models import ArtifactKind


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Return an empty target directory for TLS artifacts."""
    directory = tmp_path / "tls"
    directory.mkdir()
    return directory


@pytest.fixture
def tls_config(target_dir: Path) -> TLSConfig:
    """Return default TLS config pointed at the temporary target directory."""
    return TLSConfig(target_dir=target_dir)


@pytest.fixture
def store(tls_config: TLSConfig) -> ArtifactStore:
    """Return artifact store for the temporary target directory."""
    return ArtifactStore(tls_config)


@pytest.fixture
def engine() -> CryptographyEngine:
    """Return the in-process crypto engine."""
    return CryptographyEngine()


@pytest.fixture
def ec_key() -> EllipticCurvePrivateKey:
    """Generate secp384r1 private key."""
    return generate_private_key("secp384r1")


@pytest.fixture
def key_on_disk(store: ArtifactStore, ec_key: EllipticCurvePrivateKey) -> EllipticCurvePrivateKey:
    """Write a private key into the target directory (state KEY_ONLY)."""
    store.write(ArtifactKind.KEY, serialize_private_key(ec_key))
    return ec_key


@pytest.fixture
def propagating_logger() -> Generator[logging.Logger]:
    """Let caplog see records from the non-propagating local_tls logger."""
    logger = logging.getLogger("local_tls")
    logger.propagate = True
    try:
        yield logger
    finally:
        logger.propagate = False
