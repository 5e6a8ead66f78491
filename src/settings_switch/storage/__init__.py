"""
Settings Switch Storage Module.

Filesystem primitives used by every registry mutation.
"""

__all__ = [
    "atomic_write",
    "safe_copy",
    "file_exists",
    "ensure_dir",
    "read_bytes",
    "file_size",
    "TEMP_SUFFIX",
]

from settings_switch.storage.files import (
    TEMP_SUFFIX,
    atomic_write,
    ensure_dir,
    file_exists,
    file_size,
    read_bytes,
    safe_copy,
)
