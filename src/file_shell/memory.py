"""In-memory filesystem implementation.

MemoryFileSystem satisfies the FileSystem protocol without touching the
disk. It mirrors RealFileSystem's error and overwrite policies so the shell
can be exercised end to end in tests. Paths use POSIX semantics rooted at
``/``.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePath, PurePosixPath

from file_shell.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    NotFoundError,
    OperationError,
)
from file_shell.items import SIZE_UNKNOWN, FileSystemItem

logger = logging.getLogger(__name__)

ROOT = PurePosixPath("/")


@dataclass
class _FileNode:
    created: datetime
    data: bytes = b""


@dataclass
class _DirNode:
    created: datetime
    children: dict[str, _FileNode | _DirNode] = field(default_factory=dict)
    readable: bool = True


class _DeniedListing(Exception):
    """Raised inside size walks when a directory cannot be enumerated."""


class MemoryFileItem(FileSystemItem):
    """A file stored in a MemoryFileSystem."""

    def __init__(self, fs: MemoryFileSystem, path: PurePosixPath) -> None:
        node = fs._node(path)
        if not isinstance(node, _FileNode):
            raise NotFoundError(f"File not found: {path}", path)
        super().__init__(path, node.created)
        self._fs = fs

    @property
    def size(self) -> int:
        node = self._fs._node(self.full_path)
        if not isinstance(node, _FileNode):
            raise NotFoundError(f"File not found: {self.full_path}", self.full_path)
        return len(node.data)

    @property
    def is_directory(self) -> bool:
        return False


class MemoryDirectoryItem(FileSystemItem):
    """A directory stored in a MemoryFileSystem."""

    def __init__(self, fs: MemoryFileSystem, path: PurePosixPath) -> None:
        node = fs._node(path)
        if not isinstance(node, _DirNode):
            raise NotFoundError(f"Directory not found: {path}", path)
        super().__init__(path, node.created)
        self._fs = fs

    @property
    def size(self) -> int:
        node = self._fs._node(self.full_path)
        if not isinstance(node, _DirNode):
            raise NotFoundError(
                f"Directory not found: {self.full_path}", self.full_path
            )
        try:
            return _tree_size(node)
        except _DeniedListing:
            return SIZE_UNKNOWN

    @property
    def is_directory(self) -> bool:
        return True


def _tree_size(node: _DirNode) -> int:
    if not node.readable:
        raise _DeniedListing
    total = 0
    for child in node.children.values():
        if isinstance(child, _DirNode):
            total += _tree_size(child)
        else:
            total += len(child.data)
    return total


class MemoryFileSystem:
    """Filesystem held entirely in memory.

    Example:
        >>> fs = MemoryFileSystem()
        >>> fs.create_directory("docs")
        >>> fs.write_bytes("docs/a.txt", b"hello")
        >>> fs.get_item("docs").size
        5
    """

    def __init__(
        self,
        cwd: PurePath | str = ROOT,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize an empty filesystem.

        Args:
            cwd: Initial working directory, created if missing.
            clock: Source of creation timestamps.
        """
        self._clock = clock
        self._root = _DirNode(created=clock())
        self._cwd = ROOT
        self.create_directory(cwd)
        self._cwd = self.resolve(cwd)

    # ------------------------------------------------------------------
    # Node helpers
    # ------------------------------------------------------------------

    def _node(self, path: PurePosixPath) -> _FileNode | _DirNode | None:
        node: _FileNode | _DirNode = self._root
        for part in path.parts[1:]:
            if not isinstance(node, _DirNode) or part not in node.children:
                return None
            node = node.children[part]
        return node

    def _parent_dir(self, path: PurePosixPath) -> _DirNode:
        parent = self._node(path.parent)
        if not isinstance(parent, _DirNode):
            raise NotFoundError(f"Directory not found: {path.parent}", path.parent)
        return parent

    def _require(self, path: PurePosixPath) -> _FileNode | _DirNode:
        node = self._node(path)
        if node is None:
            raise NotFoundError(f"Path not found: {path}", path)
        return node

    # ------------------------------------------------------------------
    # FileSystem protocol
    # ------------------------------------------------------------------

    def resolve(self, path: PurePath | str) -> PurePosixPath:
        """Make a path absolute against the current directory."""
        joined = self._cwd / PurePosixPath(str(path))
        normalized = posixpath.normpath(str(joined))
        # POSIX keeps a leading double slash; collapse it to root
        return PurePosixPath("/" + normalized.lstrip("/"))

    def list_items(self, path: PurePath | str) -> list[FileSystemItem]:
        """List files, then directories, directly under path."""
        target = self.resolve(path)
        node = self._node(target)
        if not isinstance(node, _DirNode):
            raise NotFoundError(f"Directory not found: {target}", target)
        if not node.readable:
            raise AccessDeniedError(f"Access denied: {target}", target)

        files: list[FileSystemItem] = []
        dirs: list[FileSystemItem] = []
        for name, child in node.children.items():
            if isinstance(child, _DirNode):
                dirs.append(MemoryDirectoryItem(self, target / name))
            else:
                files.append(MemoryFileItem(self, target / name))
        return files + dirs

    def get_item(self, path: PurePath | str) -> FileSystemItem:
        """Look up a single file or directory."""
        target = self.resolve(path)
        if isinstance(self._require(target), _DirNode):
            return MemoryDirectoryItem(self, target)
        return MemoryFileItem(self, target)

    def delete(self, path: PurePath | str) -> None:
        """Remove a file, or a directory tree recursively."""
        target = self.resolve(path)
        self._require(target)
        if target == ROOT:
            raise OperationError("Cannot delete the root directory", target)
        del self._parent_dir(target).children[target.name]
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
        node = self._require(src)
        if isinstance(node, _DirNode):
            if dst == src or src in dst.parents:
                raise OperationError(f"Cannot copy a directory into itself: {src}", src)
            self._copy_directory(src, node, dst, overwrite)
        else:
            self._copy_file(node, dst, overwrite)
        logger.debug("Copied %s to %s (overwrite=%s)", src, dst, overwrite)

    def _copy_file(self, node: _FileNode, dst: PurePosixPath, overwrite: bool) -> None:
        existing = self._node(dst)
        if isinstance(existing, _DirNode):
            raise AlreadyExistsError(f"Destination is a directory: {dst}", dst)
        if existing is not None and not overwrite:
            raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        self._parent_dir(dst).children[dst.name] = _FileNode(
            created=self._clock(), data=node.data
        )

    def _copy_directory(
        self, src: PurePosixPath, node: _DirNode, dst: PurePosixPath, overwrite: bool
    ) -> None:
        self.create_directory(dst)
        if not node.readable:
            raise AccessDeniedError(f"Access denied: {src}", src)
        children = list(node.children.items())
        for name, child in children:
            if isinstance(child, _FileNode):
                self._copy_file(child, dst / name, overwrite)
        for name, child in children:
            if isinstance(child, _DirNode):
                self._copy_directory(src / name, child, dst / name, overwrite)

    def move(self, source: PurePath | str, destination: PurePath | str) -> None:
        """Move a file or directory, replacing an existing destination file."""
        src = self.resolve(source)
        dst = self.resolve(destination)
        node = self._require(src)
        existing = self._node(dst)

        if isinstance(node, _DirNode):
            if isinstance(existing, _DirNode):
                # Moving onto a directory places the source inside it
                dst = dst / src.name
                existing = self._node(dst)
            if dst == src or src in dst.parents:
                raise OperationError(f"Cannot move a directory into itself: {src}", src)
            if existing is not None:
                raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        elif isinstance(existing, _DirNode):
            raise OperationError(f"Destination is a directory: {dst}", dst)

        target_parent = self._parent_dir(dst)
        del self._parent_dir(src).children[src.name]
        target_parent.children[dst.name] = node
        logger.debug("Moved %s to %s", src, dst)

    def exists(self, path: PurePath | str) -> bool:
        """Check if a file or directory exists."""
        return self._node(self.resolve(path)) is not None

    def is_file(self, path: PurePath | str) -> bool:
        """Check if path is a file."""
        return isinstance(self._node(self.resolve(path)), _FileNode)

    def is_dir(self, path: PurePath | str) -> bool:
        """Check if path is a directory."""
        return isinstance(self._node(self.resolve(path)), _DirNode)

    def get_current_directory(self) -> PurePosixPath:
        """Get the current working directory."""
        return self._cwd

    def set_current_directory(self, path: PurePath | str) -> None:
        """Change the current working directory."""
        target = self.resolve(path)
        if not isinstance(self._node(target), _DirNode):
            raise NotFoundError(f"Directory not found: {target}", target)
        self._cwd = target

    def create_directory(self, path: PurePath | str) -> None:
        """Create a directory and missing parents."""
        target = self.resolve(path)
        node = self._root
        current = ROOT
        for part in target.parts[1:]:
            current = current / part
            child = node.children.get(part)
            if child is None:
                child = _DirNode(created=self._clock())
                node.children[part] = child
            elif not isinstance(child, _DirNode):
                if current == target:
                    raise AlreadyExistsError(f"Path already exists: {target}", target)
                raise NotFoundError(f"Directory not found: {current}", current)
            node = child

    def create_file(self, path: PurePath | str) -> None:
        """Create or truncate an empty file."""
        self.write_bytes(path, b"")

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def write_bytes(self, path: PurePath | str, data: bytes) -> None:
        """Create or replace a file with the given content."""
        target = self.resolve(path)
        existing = self._node(target)
        if isinstance(existing, _DirNode):
            raise OperationError(f"Is a directory: {target}", target)
        if isinstance(existing, _FileNode):
            existing.data = data
            return
        self._parent_dir(target).children[target.name] = _FileNode(
            created=self._clock(), data=data
        )

    def read_bytes(self, path: PurePath | str) -> bytes:
        """Read the content of a file."""
        target = self.resolve(path)
        node = self._node(target)
        if not isinstance(node, _FileNode):
            raise NotFoundError(f"File not found: {target}", target)
        return node.data

    def deny_listing(self, path: PurePath | str) -> None:
        """Mark a directory as unreadable, like a permission-denied listing."""
        target = self.resolve(path)
        node = self._node(target)
        if not isinstance(node, _DirNode):
            raise NotFoundError(f"Directory not found: {target}", target)
        node.readable = False
