"""OS-backed filesystem implementation.

RealFileSystem wraps standard library os, pathlib and shutil operations
and satisfies the FileSystem protocol structurally. It keeps its own
working directory instead of calling os.chdir, so several instances can
coexist with independent current directories.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path, PurePath

from file_shell.errors import (
    AlreadyExistsError,
    NotFoundError,
    OperationError,
    translate_os_errors,
)
from file_shell.items import DirectoryItem, FileItem, FileSystemItem, item_for_path

logger = logging.getLogger(__name__)


class RealFileSystem:
    """Production filesystem implementation."""

    def __init__(self, cwd: Path | str | None = None) -> None:
        """Initialize the filesystem.

        Args:
            cwd: Initial working directory. Defaults to the process cwd.

        Raises:
            NotFoundError: If cwd is not an existing directory.
            OperationError: If the process cwd cannot be determined.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        if cwd is None:
            with translate_os_errors("."):
                start = Path.cwd()
        else:
            start = Path(os.path.abspath(cwd))
        if not start.is_dir():
            raise NotFoundError(f"Directory not found: {start}", start)
        self._cwd = start

    @classmethod
    def create(cls, start_dir: Path | str) -> RealFileSystem:
        """Create a filesystem rooted at a specific working directory."""
        return cls(cwd=start_dir)

    @classmethod
    def create_default(cls) -> RealFileSystem:
        """Create a filesystem starting in the process working directory."""
        return cls()

    def resolve(self, path: PurePath | str) -> Path:
        """Make a path absolute against the current directory."""
        return Path(os.path.normpath(self._cwd / path))

    def list_items(self, path: PurePath | str) -> list[FileSystemItem]:
        """List files, then directories, directly under path."""
        target = self.resolve(path)
        if not target.is_dir():
            raise NotFoundError(f"Directory not found: {target}", target)

        files: list[FileSystemItem] = []
        dirs: list[FileSystemItem] = []
        with translate_os_errors(target), os.scandir(target) as entries:
            for entry in entries:
                if entry.is_dir():
                    dirs.append(DirectoryItem(entry.path))
                elif entry.is_file():
                    files.append(FileItem(entry.path))
        return files + dirs

    def get_item(self, path: PurePath | str) -> FileSystemItem:
        """Look up a single file or directory."""
        return item_for_path(self.resolve(path))

    def delete(self, path: PurePath | str) -> None:
        """Remove a file, or a directory tree recursively."""
        target = self.resolve(path)
        with translate_os_errors(target):
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        logger.debug("Deleted %s", target)

    def copy(
        self,
        source: PurePath | str,
        destination: PurePath | str,
        overwrite: bool = False,
    ) -> None:
        """Copy a file, or merge a directory tree into destination."""
        src = self.resolve(source)
        dst = self.resolve(destination)
        if not self.exists(src):
            raise NotFoundError(f"Path not found: {src}", src)
        if src.is_dir():
            if dst == src or src in dst.parents:
                raise OperationError(f"Cannot copy a directory into itself: {src}", src)
            self._copy_directory(src, dst, overwrite)
        else:
            self._copy_file(src, dst, overwrite)
        logger.debug("Copied %s to %s (overwrite=%s)", src, dst, overwrite)

    def _copy_file(self, src: Path, dst: Path, overwrite: bool) -> None:
        if dst.is_dir():
            raise AlreadyExistsError(f"Destination is a directory: {dst}", dst)
        if dst.exists() and not overwrite:
            raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        with translate_os_errors(src):
            shutil.copy2(src, dst)

    def _copy_directory(self, src: Path, dst: Path, overwrite: bool) -> None:
        """Pre-order, depth-first merge copy. Symlink cycles are not detected."""
        with translate_os_errors(dst):
            dst.mkdir(parents=True, exist_ok=True)
        with translate_os_errors(src), os.scandir(src) as it:
            entries = list(it)

        for entry in entries:
            if entry.is_file():
                self._copy_file(Path(entry.path), dst / entry.name, overwrite)
        for entry in entries:
            if entry.is_dir():
                self._copy_directory(Path(entry.path), dst / entry.name, overwrite)

    def move(self, source: PurePath | str, destination: PurePath | str) -> None:
        """Move a file or directory, replacing an existing destination file."""
        src = self.resolve(source)
        dst = self.resolve(destination)
        if not self.exists(src):
            raise NotFoundError(f"Path not found: {src}", src)

        if src.is_dir():
            if dst.is_dir():
                # Moving onto a directory places the source inside it
                dst = dst / src.name
            if dst == src or src in dst.parents:
                raise OperationError(f"Cannot move a directory into itself: {src}", src)
            if self.exists(dst):
                raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        elif dst.is_dir():
            raise OperationError(f"Destination is a directory: {dst}", dst)

        with translate_os_errors(src):
            if src.is_dir():
                shutil.move(src, dst)
            else:
                try:
                    os.replace(src, dst)
                except OSError as e:
                    if e.errno != errno.EXDEV:
                        raise
                    # Different volume: copy then delete
                    shutil.move(src, dst)
        logger.debug("Moved %s to %s", src, dst)

    def exists(self, path: PurePath | str) -> bool:
        """Check if a file or directory exists."""
        target = self.resolve(path)
        return target.is_file() or target.is_dir()

    def is_file(self, path: PurePath | str) -> bool:
        """Check if path is a file."""
        return self.resolve(path).is_file()

    def is_dir(self, path: PurePath | str) -> bool:
        """Check if path is a directory."""
        return self.resolve(path).is_dir()

    def get_current_directory(self) -> Path:
        """Get the current working directory."""
        return self._cwd

    def set_current_directory(self, path: PurePath | str) -> None:
        """Change the current working directory."""
        target = self.resolve(path)
        if not target.is_dir():
            raise NotFoundError(f"Directory not found: {target}", target)
        self._cwd = target
        logger.debug("Working directory is now %s", target)

    def create_directory(self, path: PurePath | str) -> None:
        """Create a directory and missing parents."""
        target = self.resolve(path)
        with translate_os_errors(target):
            target.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory %s", target)

    def create_file(self, path: PurePath | str) -> None:
        """Create or truncate an empty file."""
        target = self.resolve(path)
        with translate_os_errors(target), open(target, "wb"):
            pass
        logger.debug("Created file %s", target)
