"""Protocol definitions for core abstractions.

The shell and the CLI depend on the filesystem only through the FileSystem
protocol defined here. Designing to this interface enables:
- An OS-backed implementation for real use
- An in-memory implementation for tests
- Mock substitution in unit tests

All concrete implementations satisfy the protocol structurally (duck typing).
"""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from file_shell.items import FileSystemItem


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Relative paths are resolved against the implementation's own current
    directory, never the process-wide one. Every failure is raised as a
    FileShellError subclass.
    """

    def resolve(self, path: PurePath | str) -> PurePath:
        """Make a path absolute against the current directory.

        ``.`` and ``..`` segments are collapsed lexically.

        Args:
            path: Absolute or relative path.

        Returns:
            Normalized absolute path.
        """
        ...

    def list_items(self, path: PurePath | str) -> list[FileSystemItem]:
        """List the immediate children of a directory.

        Args:
            path: Directory to list.

        Returns:
            All files first, then all directories, in enumeration order.

        Raises:
            NotFoundError: If path is not a directory.
        """
        ...

    def get_item(self, path: PurePath | str) -> FileSystemItem:
        """Look up a single path.

        Args:
            path: File or directory path.

        Returns:
            The matching item.

        Raises:
            NotFoundError: If nothing exists at path.
        """
        ...

    def delete(self, path: PurePath | str) -> None:
        """Remove a file, or a directory with all its contents.

        Args:
            path: Path to remove.

        Raises:
            NotFoundError: If nothing exists at path.
        """
        ...

    def copy(
        self,
        source: PurePath | str,
        destination: PurePath | str,
        overwrite: bool = False,
    ) -> None:
        """Copy a file or a directory tree.

        Directories are merged into an existing destination. Files are
        only replaced when ``overwrite`` is set.

        Args:
            source: File or directory to copy.
            destination: Target path.
            overwrite: Replace existing destination files.

        Raises:
            NotFoundError: If source does not exist.
            AlreadyExistsError: If a destination file exists and overwrite
                is False.
        """
        ...

    def move(self, source: PurePath | str, destination: PurePath | str) -> None:
        """Move a file or directory.

        An existing destination file is always replaced.

        Args:
            source: File or directory to move.
            destination: Target path.

        Raises:
            NotFoundError: If source does not exist.
        """
        ...

    def exists(self, path: PurePath | str) -> bool:
        """Check if a file or directory exists at path."""
        ...

    def is_file(self, path: PurePath | str) -> bool:
        """Check if path is an existing file."""
        ...

    def is_dir(self, path: PurePath | str) -> bool:
        """Check if path is an existing directory."""
        ...

    def get_current_directory(self) -> PurePath:
        """Get the current working directory."""
        ...

    def set_current_directory(self, path: PurePath | str) -> None:
        """Change the current working directory.

        Args:
            path: Absolute path, or path relative to the current directory.

        Raises:
            NotFoundError: If path is not an existing directory. The current
                directory is left unchanged.
        """
        ...

    def create_directory(self, path: PurePath | str) -> None:
        """Create a directory and any missing parents.

        Does nothing if the directory already exists.

        Args:
            path: Directory to create.
        """
        ...

    def create_file(self, path: PurePath | str) -> None:
        """Create an empty file, truncating any existing content.

        Args:
            path: File to create.

        Raises:
            NotFoundError: If the parent directory does not exist.
        """
        ...
