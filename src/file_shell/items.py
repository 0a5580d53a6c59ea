"""Filesystem item model.

An item is a named entry (file or directory) with a creation time and a
size rule that depends on its kind. Items are short-lived snapshots built
when a directory is listed or a single path is looked up; they hold no
open handles.

Pattern: Template Method - the base class carries the shared fields,
variants supply ``size`` and ``is_directory``.
"""

from __future__ import annotations

import logging
import os
import stat
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path, PurePath

from file_shell.errors import NotFoundError, translate_os_errors

__all__ = [
    "SIZE_UNKNOWN",
    "DirectoryItem",
    "FileItem",
    "FileSystemItem",
    "item_for_path",
]

logger = logging.getLogger(__name__)

# Directory size when some part of the tree could not be enumerated
SIZE_UNKNOWN = -1


class FileSystemItem(ABC):
    """Base class for files and directories.

    Attributes:
        name: Final component of ``full_path``.
        full_path: Path the item was constructed with.
        creation_time: Creation timestamp captured at construction.
    """

    def __init__(self, full_path: PurePath, creation_time: datetime) -> None:
        self.full_path = full_path
        self.name = full_path.name
        self.creation_time = creation_time

    @property
    @abstractmethod
    def size(self) -> int:
        """Size in bytes, or SIZE_UNKNOWN."""
        ...

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        """True for directories, False for files."""
        ...

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.full_path)!r})"


def _creation_time(st: os.stat_result) -> datetime:
    """Best available creation time for a stat result.

    Birth time where the platform reports it, otherwise st_ctime (creation
    time on Windows, metadata change time on most Unixes).
    """
    return datetime.fromtimestamp(getattr(st, "st_birthtime", st.st_ctime))


def _stat_existing(path: Path, want_dir: bool) -> os.stat_result:
    """Stat ``path`` and check it is the expected kind.

    Raises:
        NotFoundError: If nothing of the expected kind exists at ``path``.
    """
    with translate_os_errors(path):
        st = os.stat(path)
    if stat.S_ISDIR(st.st_mode) != want_dir:
        kind = "Directory" if want_dir else "File"
        raise NotFoundError(f"{kind} not found: {path}", path)
    return st


class FileItem(FileSystemItem):
    """A regular file on the OS filesystem."""

    def __init__(self, path: Path | str) -> None:
        path = Path(path)
        super().__init__(path, _creation_time(_stat_existing(path, want_dir=False)))

    @property
    def size(self) -> int:
        # Re-queried on every access
        with translate_os_errors(self.full_path):
            return os.stat(self.full_path).st_size

    @property
    def is_directory(self) -> bool:
        return False


def _tree_size(path: str | os.PathLike[str]) -> int:
    """Sum the byte lengths of every file below ``path``.

    PermissionError from any nested enumeration propagates to the caller.
    """
    total = 0
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir():
                total += _tree_size(entry.path)
            elif entry.is_file():
                total += entry.stat().st_size
    return total


class DirectoryItem(FileSystemItem):
    """A directory on the OS filesystem."""

    def __init__(self, path: Path | str) -> None:
        path = Path(path)
        super().__init__(path, _creation_time(_stat_existing(path, want_dir=True)))

    @property
    def size(self) -> int:
        """Recursive size of every nested file.

        Computed by a full traversal on each access. Returns SIZE_UNKNOWN
        when any directory in the tree denies enumeration, never a partial
        sum.

        Raises:
            NotFoundError: If the directory, or an entry inside it, is
                removed while the tree is being walked.
        """
        with translate_os_errors(self.full_path):
            try:
                return _tree_size(self.full_path)
            except PermissionError as e:
                logger.debug("Size of %s unknown: %s", self.full_path, e)
                return SIZE_UNKNOWN

    @property
    def is_directory(self) -> bool:
        return True


def item_for_path(path: Path | str) -> FileSystemItem:
    """Build the matching item variant for an existing path.

    Args:
        path: Path to a file or directory.

    Returns:
        DirectoryItem for directories, FileItem otherwise.

    Raises:
        NotFoundError: If nothing exists at ``path``.
    """
    path = Path(path)
    if path.is_dir():
        return DirectoryItem(path)
    if path.exists():
        return FileItem(path)
    raise NotFoundError(f"Path not found: {path}", path)
