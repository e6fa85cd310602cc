"""Atomic file writes so a PEM artifact is never left half-written.

A temp file is created in the destination directory, fsynced, then renamed
over the destination with os.replace (atomic on POSIX filesystems).
"""

import os
import tempfile
from pathlib import Path


def atomic_write_bytes(path: Path, content: bytes, mode: int = 0o644) -> None:
    """Atomically write bytes to path with the given file mode.

    Args:
        path: Destination file; parent directories are created if missing
        content: Bytes to write
        mode: Permission bits applied before the rename
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory as the destination so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
