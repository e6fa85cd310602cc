"""Error taxonomy for TLS artifact operations."""

from pathlib import Path


class TLSArtifactError(Exception):
    """Base class for all errors raised by artifact operations."""


class UsageError(TLSArtifactError):
    """Required argument missing or subcommand not recognised."""


class MissingKeyError(TLSArtifactError):
    """An operation that needs the private key ran before one was generated."""

    def __init__(self, key_path: Path) -> None:
        self.key_path = key_path
        super().__init__(
            f"private key not found: {key_path}. "
            "Run 'key' first (or 'reset <domain>' to create everything)"
        )


class MissingRequestError(TLSArtifactError):
    """Sign ran without an existing certificate signing request."""

    def __init__(self, request_path: Path) -> None:
        self.request_path = request_path
        super().__init__(
            f"certificate signing request not found: {request_path}. "
            "Run 'request <domain>' first"
        )


class EngineFailure(TLSArtifactError):
    """The crypto engine or the filesystem rejected an operation."""


class ArtifactExistsError(TLSArtifactError):
    """An artifact exists and the overwrite policy forbids replacing it."""
