"""Private key generation."""

from .artifact_store import ArtifactStore
from .crypto_engine import CryptoEngine
from .logging_config import LOGGER
from .models import ArtifactKind, KeyResult


class KeyGenerator:
    """Produces the private key artifact, always replacing any existing key."""

    def __init__(self, store: ArtifactStore, engine: CryptoEngine) -> None:
        self.store = store
        self.engine = engine

    def generate(self) -> KeyResult:
        """Generate a fresh EC private key and write it to the target directory.

        No preconditions. An existing key is overwritten, which leaves any
        CSR or certificate made from it orphaned; those are reported in the
        result and logged as warnings but left on disk.

        Returns:
            KeyResult with key path, curve, and orphaned artifact kinds

        Raises:
            EngineFailure: If the engine fails or the key cannot be written
        """
        config = self.store.config
        orphaned = [
            kind
            for kind in (ArtifactKind.REQUEST, ArtifactKind.CERTIFICATE)
            if self.store.exists(kind)
        ]

        key_pem = self.engine.generate_key(config.curve)
        key_path = self.store.write(ArtifactKind.KEY, key_pem, overwrite=config.overwrite)
        LOGGER.info("Private key written: %s (%s)", key_path, config.curve)

        for kind in orphaned:
            LOGGER.warning(
                "%s %s was made with the previous key and is now orphaned",
                kind.value,
                self.store.path(kind),
            )

        return KeyResult(key_path=key_path, curve=config.curve, orphaned=orphaned)
