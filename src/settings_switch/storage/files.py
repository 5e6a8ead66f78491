"""
Storage primitives - atomic writes and safe copies.

Every write goes to a sibling temporary file that is renamed into place, so
a reader never sees a partially written file and a failed write leaves the
previous content untouched.
"""

import logging
import os
from pathlib import Path

from settings_switch.core.exceptions import SourceNotFoundError, StorageError

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def ensure_dir(path: Path) -> None:
    """Create a directory and its parents; existing directories are fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(
            f"Failed to create directory: {e.strerror or e}",
            path=str(path),
            operation="mkdir",
        ) from e


def file_exists(path: Path) -> bool:
    """Existence probe. Does not guarantee the content is readable."""
    return path.exists()


def read_bytes(path: Path) -> bytes:
    """
    Read a whole file.

    Raises:
        SourceNotFoundError: If the file does not exist
        StorageError: If the file cannot be read
    """
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise SourceNotFoundError(path=str(path)) from e
    except OSError as e:
        raise StorageError(
            f"Failed to read file: {e.strerror or e}",
            path=str(path),
            operation="read",
        ) from e


def atomic_write(path: Path, data: bytes) -> None:
    """
    Write content to path atomically using the write-replace pattern.

    Raises:
        StorageError: If the write or rename fails
    """
    ensure_dir(path.parent)
    temp_path = path.with_name(path.name + TEMP_SUFFIX)

    try:
        # Write to temporary file in same directory
        with open(temp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # Atomic replace operation
        os.replace(temp_path, path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise StorageError(
            f"Failed to write file: {e.strerror or e}",
            path=str(path),
            operation="write",
        ) from e
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    logger.debug(f"Wrote {len(data)} bytes to {path}")


def safe_copy(src: Path, dst: Path) -> None:
    """
    Copy src onto dst through atomic_write.

    Raises:
        SourceNotFoundError: If src does not exist
        StorageError: If reading src or writing dst fails
    """
    if not file_exists(src):
        raise SourceNotFoundError(path=str(src))

    atomic_write(dst, read_bytes(src))
    logger.debug(f"Copied {src} -> {dst}")


def file_size(path: Path) -> int | None:
    """Size in bytes, or None when the file cannot be stat'ed."""
    try:
        return path.stat().st_size
    except OSError:
        return None
