"""Tests for storage primitives."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from settings_switch.core.exceptions import SourceNotFoundError, StorageError
from settings_switch.storage import (
    TEMP_SUFFIX,
    atomic_write,
    ensure_dir,
    file_exists,
    file_size,
    read_bytes,
    safe_copy,
)


class TestAtomicWrite:
    """Tests for atomic_write."""

    def test_writes_content(self, temp_dir: Path) -> None:
        """Content is visible at the path after the write."""
        path = temp_dir / "out.json"
        atomic_write(path, b'{"a": 1}')
        assert path.read_bytes() == b'{"a": 1}'

    def test_creates_parent_directories(self, temp_dir: Path) -> None:
        """Missing parent directories are created."""
        path = temp_dir / "nested" / "deeper" / "out.json"
        atomic_write(path, b"{}")
        assert path.read_bytes() == b"{}"

    def test_overwrites_existing(self, temp_dir: Path) -> None:
        """An existing file is replaced."""
        path = temp_dir / "out.json"
        path.write_bytes(b"old")
        atomic_write(path, b"new")
        assert path.read_bytes() == b"new"

    def test_no_temp_file_left(self, temp_dir: Path) -> None:
        """The sibling temp file does not survive a successful write."""
        path = temp_dir / "out.json"
        atomic_write(path, b"{}")
        assert not (temp_dir / f"out.json{TEMP_SUFFIX}").exists()

    def test_failed_rename_keeps_original(self, temp_dir: Path) -> None:
        """A failed rename leaves the original untouched and cleans up."""
        path = temp_dir / "out.json"
        path.write_bytes(b"original")

        with patch("settings_switch.storage.files.os.replace", side_effect=OSError(13, "denied")):
            with pytest.raises(StorageError, match="Failed to write file"):
                atomic_write(path, b"replacement")

        assert path.read_bytes() == b"original"
        assert not (temp_dir / f"out.json{TEMP_SUFFIX}").exists()


class TestSafeCopy:
    """Tests for safe_copy."""

    def test_copies_bytes(self, temp_dir: Path) -> None:
        """Destination ends up byte-identical to the source."""
        src = temp_dir / "src.json"
        dst = temp_dir / "dst.json"
        src.write_bytes(b'{"x": [1, 2, 3]}\n')
        safe_copy(src, dst)
        assert dst.read_bytes() == src.read_bytes()

    def test_missing_source(self, temp_dir: Path) -> None:
        """A missing source raises SourceNotFoundError and writes nothing."""
        dst = temp_dir / "dst.json"
        with pytest.raises(SourceNotFoundError) as exc_info:
            safe_copy(temp_dir / "missing.json", dst)
        assert exc_info.value.path == str(temp_dir / "missing.json")
        assert not dst.exists()


class TestHelpers:
    """Tests for the small filesystem helpers."""

    def test_ensure_dir_idempotent(self, temp_dir: Path) -> None:
        """Creating an existing directory is not an error."""
        path = temp_dir / "a" / "b"
        ensure_dir(path)
        ensure_dir(path)
        assert path.is_dir()

    def test_file_exists(self, temp_dir: Path) -> None:
        """file_exists reflects the filesystem."""
        path = temp_dir / "f"
        assert file_exists(path) is False
        path.write_bytes(b"")
        assert file_exists(path) is True

    def test_read_bytes_missing(self, temp_dir: Path) -> None:
        """read_bytes raises SourceNotFoundError for missing files."""
        with pytest.raises(SourceNotFoundError):
            read_bytes(temp_dir / "missing")

    def test_file_size(self, temp_dir: Path) -> None:
        """file_size returns None for missing files."""
        path = temp_dir / "f"
        assert file_size(path) is None
        path.write_bytes(b"12345")
        assert file_size(path) == 5

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="permission bits")
    def test_read_bytes_unreadable(self, temp_dir: Path) -> None:
        """Unreadable files raise StorageError."""
        path = temp_dir / "locked"
        path.write_bytes(b"{}")
        path.chmod(0)
        try:
            with pytest.raises(StorageError, match="Failed to read file"):
                read_bytes(path)
        finally:
            path.chmod(0o600)
