"""Tests for the filesystem item model."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from file_shell.errors import NotFoundError
from file_shell.items import (
    SIZE_UNKNOWN,
    DirectoryItem,
    FileItem,
    FileSystemItem,
    item_for_path,
)


class TestFileItem:
    """Tests for FileItem."""

    def test_fields(self, tmp_path: Path) -> None:
        """Test name, path and creation time are captured."""
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        item = FileItem(path)

        assert item.name == "notes.txt"
        assert item.full_path == path
        assert isinstance(item.creation_time, datetime)
        assert item.is_directory is False
        assert str(item) == "notes.txt"

    def test_size_is_byte_length(self, tmp_path: Path) -> None:
        """Test size equals the file's byte length."""
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00" * 42)

        assert FileItem(path).size == 42

    def test_size_is_requeried(self, tmp_path: Path) -> None:
        """Test size reflects changes made after construction."""
        path = tmp_path / "grow.txt"
        path.write_text("ab")
        item = FileItem(path)

        path.write_text("abcdef")

        assert item.size == 6

    def test_missing_raises_not_found(self, tmp_path: Path) -> None:
        """Test constructing over a missing path raises NotFoundError."""
        with pytest.raises(NotFoundError):
            FileItem(tmp_path / "missing.txt")

    def test_directory_raises_not_found(self, tmp_path: Path) -> None:
        """Test constructing a FileItem over a directory raises NotFoundError."""
        with pytest.raises(NotFoundError):
            FileItem(tmp_path)


class TestDirectoryItem:
    """Tests for DirectoryItem."""

    def test_fields(self, tmp_path: Path) -> None:
        """Test name and discriminator."""
        path = tmp_path / "docs"
        path.mkdir()

        item = DirectoryItem(path)

        assert item.name == "docs"
        assert item.is_directory is True
        assert str(item) == "docs"

    def test_empty_directory_size_is_zero(self, tmp_path: Path) -> None:
        """Test an empty directory has size 0, not the sentinel."""
        path = tmp_path / "empty"
        path.mkdir()

        assert DirectoryItem(path).size == 0

    def test_size_sums_files(self, tmp_path: Path) -> None:
        """Test size of a directory with 10 and 20 byte files is 30."""
        (tmp_path / "a").write_bytes(b"a" * 10)
        (tmp_path / "b").write_bytes(b"b" * 20)

        assert DirectoryItem(tmp_path).size == 30

    def test_size_is_recursive(self, sample_tree: Path) -> None:
        """Test files at every depth are counted."""
        assert DirectoryItem(sample_tree).size == 10 + 20 + 4

    def test_permission_denied_yields_sentinel(
        self, sample_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an unreadable subdirectory makes the whole size unknown."""
        locked = sample_tree / "sub" / "deeper"
        real_scandir = os.scandir

        def guarded_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", guarded_scandir)

        assert DirectoryItem(sample_tree).size == SIZE_UNKNOWN

    def test_vanished_subdirectory_raises(
        self, sample_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a directory removed mid-walk raises NotFoundError, not the sentinel."""
        gone = sample_tree / "sub" / "deeper"
        real_scandir = os.scandir

        def vanishing_scandir(path):
            if Path(path) == gone:
                raise FileNotFoundError(2, "No such file or directory", str(path))
            return real_scandir(path)

        item = DirectoryItem(sample_tree)
        monkeypatch.setattr(os, "scandir", vanishing_scandir)

        with pytest.raises(NotFoundError):
            item.size

    @pytest.mark.skipif(
        os.name == "nt" or os.geteuid() == 0,
        reason="needs POSIX permissions enforced for a non-root user",
    )
    def test_unreadable_directory_on_disk(self, tmp_path: Path) -> None:
        """Test a chmod 000 subdirectory yields the sentinel, not a partial sum."""
        (tmp_path / "visible.txt").write_bytes(b"v" * 5)
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "hidden.txt").write_bytes(b"h" * 7)
        locked.chmod(0)
        try:
            assert DirectoryItem(tmp_path).size == SIZE_UNKNOWN
        finally:
            locked.chmod(0o755)

    def test_file_raises_not_found(self, tmp_path: Path) -> None:
        """Test constructing a DirectoryItem over a file raises NotFoundError."""
        path = tmp_path / "file.txt"
        path.touch()

        with pytest.raises(NotFoundError):
            DirectoryItem(path)


class TestItemForPath:
    """Tests for item_for_path factory."""

    def test_file(self, tmp_path: Path) -> None:
        """Test a file path yields FileItem."""
        path = tmp_path / "f.txt"
        path.touch()

        item = item_for_path(path)

        assert isinstance(item, FileItem)
        assert isinstance(item, FileSystemItem)

    def test_directory(self, tmp_path: Path) -> None:
        """Test a directory path yields DirectoryItem."""
        assert isinstance(item_for_path(tmp_path), DirectoryItem)

    def test_missing(self, tmp_path: Path) -> None:
        """Test a missing path raises NotFoundError."""
        with pytest.raises(NotFoundError):
            item_for_path(tmp_path / "nope")
