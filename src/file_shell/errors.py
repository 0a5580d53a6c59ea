"""Error hierarchy for filesystem operations.

Every failure surfaced by a FileSystem implementation derives from
FileShellError, so the shell can report it and keep running.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import PurePath

__all__ = [
    "AccessDeniedError",
    "AlreadyExistsError",
    "FileShellError",
    "NotFoundError",
    "OperationError",
    "translate_os_errors",
]


class FileShellError(Exception):
    """Base error for file-shell operations."""

    def __init__(self, message: str, path: PurePath | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(FileShellError):
    """Path does not resolve to the expected file or directory."""

    pass


class AlreadyExistsError(FileShellError):
    """Destination already exists and overwriting was not requested."""

    pass


class OperationError(FileShellError):
    """Any other OS-level failure."""

    pass


class AccessDeniedError(OperationError):
    """The OS denied access to a path."""

    pass


@contextmanager
def translate_os_errors(path: PurePath | str) -> Iterator[None]:
    """Re-raise OSError from the enclosed block as a FileShellError.

    The filename recorded on the OSError wins over ``path`` when present,
    so failures deep inside a recursive operation name the real culprit.

    Args:
        path: Path the enclosed operation works on.

    Raises:
        NotFoundError: For FileNotFoundError and NotADirectoryError.
        AlreadyExistsError: For FileExistsError.
        AccessDeniedError: For PermissionError.
        OperationError: For any other OSError.
    """
    try:
        yield
    except (FileNotFoundError, NotADirectoryError) as e:
        culprit = e.filename or path
        raise NotFoundError(f"Path not found: {culprit}", culprit) from e
    except FileExistsError as e:
        culprit = e.filename or path
        raise AlreadyExistsError(f"Path already exists: {culprit}", culprit) from e
    except PermissionError as e:
        culprit = e.filename or path
        raise AccessDeniedError(f"Access denied: {culprit}", culprit) from e
    except OSError as e:
        culprit = e.filename or path
        raise OperationError(f"{e.strerror or e}: {culprit}", culprit) from e
