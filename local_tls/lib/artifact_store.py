"""Artifact store for the key, CSR and certificate of one target directory."""

from pathlib import Path

from .atomic import atomic_write_bytes
from .config import TLSConfig
from .errors import ArtifactExistsError, EngineFailure
from .models import ArtifactKind, ArtifactState

FILE_MODES = {
    ArtifactKind.KEY: 0o600,
    ArtifactKind.REQUEST: 0o644,
    ArtifactKind.CERTIFICATE: 0o644,
}


class ArtifactStore:
    """Resolves, checks, reads and persists the three TLS artifacts.

    Queries never touch the filesystem beyond stat calls. Directory
    writability is not checked up front; errors surface on write.
    """

    def __init__(self, config: TLSConfig) -> None:
        """Initialize store for the configured target directory.

        Args:
            config: Configuration with target_dir and artifact file names
        """
        self.config = config
        self.target_dir = Path(config.target_dir)
        self._filenames = {
            ArtifactKind.KEY: config.key_filename,
            ArtifactKind.REQUEST: config.request_filename,
            ArtifactKind.CERTIFICATE: config.certificate_filename,
        }

    def path(self, kind: ArtifactKind) -> Path:
        """Return the location of an artifact in the target directory."""
        return self.target_dir / self._filenames[kind]

    def exists(self, kind: ArtifactKind) -> bool:
        """Return True if the artifact file exists."""
        return self.path(kind).is_file()

    def state(self) -> ArtifactState:
        """Return the lifecycle state derived from which artifacts exist."""
        return ArtifactState.from_presence(
            key=self.exists(ArtifactKind.KEY),
            request=self.exists(ArtifactKind.REQUEST),
            certificate=self.exists(ArtifactKind.CERTIFICATE),
        )

    def read(self, kind: ArtifactKind) -> bytes:
        """Return raw PEM bytes of an artifact.

        Raises:
            EngineFailure: If the artifact cannot be read
        """
        path = self.path(kind)
        try:
            return path.read_bytes()
        except OSError as e:
            raise EngineFailure(f"could not read {kind.value} {path}: {e}") from e

    def write(self, kind: ArtifactKind, pem: bytes, overwrite: bool = True) -> Path:
        """Persist an artifact atomically.

        Args:
            kind: Artifact to write
            pem: PEM-encoded content
            overwrite: Replace an existing file; when False an existing file is an error

        Returns:
            Path of the written artifact

        Raises:
            ArtifactExistsError: If overwrite is False and the artifact exists
            EngineFailure: If the target directory is not writable
        """
        path = self.path(kind)
        if not overwrite and path.exists():
            raise ArtifactExistsError(f"{kind.value} already exists: {path}")

        try:
            atomic_write_bytes(path, pem, mode=FILE_MODES[kind])
        except OSError as e:
            raise EngineFailure(f"could not write {kind.value} {path}: {e}") from e
        return path
