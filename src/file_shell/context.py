"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in the shell and CLI commands.

The filesystem is typed using the FileSystem Protocol rather than a concrete
implementation, so the shell runs unchanged against RealFileSystem or
MemoryFileSystem.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from rich.console import Console

from file_shell.display import Display
from file_shell.editor import launch_editor
from file_shell.protocols import FileSystem

EditorLauncher = Callable[[PurePath, PurePath | None, str | None], str | None]


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from file_shell.filesystem import RealFileSystem
    return RealFileSystem()

@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for everything the shell and the CLI
    commands use. Tests construct it directly with test doubles.

    Attributes:
        filesystem: Filesystem the commands operate on.
        display: Output sink.
        editor: Editor command line override (None uses the system opener).
        launcher: Function spawning the external program.
    """

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    display: Display = field(default_factory=Display)
    editor: str | None = None
    launcher: EditorLauncher = launch_editor


def create_context(
    start_dir: Path | None = None,
    editor: str | None = None,
    console: Console | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        start_dir: Initial working directory (defaults to the process cwd).
        editor: Editor command line override.
        console: Console for output (defaults to stdout).

    Returns:
        Configured AppContext with all dependencies.

    Raises:
        NotFoundError: If start_dir is not an existing directory.
    """
    from file_shell.filesystem import RealFileSystem

    filesystem = (
        RealFileSystem.create(start_dir)
        if start_dir
        else RealFileSystem.create_default()
    )
    return AppContext(
        filesystem=filesystem,
        display=Display(console),
        editor=editor,
    )
