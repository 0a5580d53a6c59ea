"""Interactive command-line file manager."""

__version__ = "0.1.0"

# Export the filesystem interface and item model for type hints and dependency injection
from file_shell.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    FileShellError,
    NotFoundError,
    OperationError,
)
from file_shell.items import SIZE_UNKNOWN, FileSystemItem
from file_shell.protocols import FileSystem

__all__ = [
    "__version__",
    "SIZE_UNKNOWN",
    "AccessDeniedError",
    "AlreadyExistsError",
    "FileShellError",
    "FileSystem",
    "FileSystemItem",
    "NotFoundError",
    "OperationError",
]
