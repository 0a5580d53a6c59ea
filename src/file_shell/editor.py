"""External program launch for the edit command.

Opens a file with the platform's default associated program, or with an
explicitly configured command, and returns immediately. The spawned process
is never waited on. Returns an error message string instead of raising for
UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import PurePath

logger = logging.getLogger(__name__)


def editor_command(command: str | None = None) -> list[str] | None:
    """Work out the command line used to open files.

    Terminal editors from $VISUAL/$EDITOR are not consulted: the program is
    detached from the terminal, so only a command that opens its own window
    is usable here.

    Args:
        command: Explicit command line, usually from ``--editor``.

    Returns:
        Command tokens, or None when the platform default opener should be used.
    """
    if command and command.strip():
        return shlex.split(command)
    return None


def _platform_opener() -> list[str]:
    if sys.platform == "darwin":
        return ["open"]
    return ["xdg-open"]


def launch_editor(
    target: PurePath,
    cwd: PurePath | None = None,
    command: str | None = None,
) -> str | None:
    """Open a file in an external program without waiting for it.

    Args:
        target: File to open.
        cwd: Working directory for the spawned process.
        command: Explicit command line. Defaults to the platform opener
            (``os.startfile`` on Windows, ``open`` on macOS, ``xdg-open``
            elsewhere).

    Returns:
        None on successful spawn, otherwise an error message.
    """
    cmd = editor_command(command)
    try:
        if cmd is None and sys.platform == "win32":
            os.startfile(str(target))  # type: ignore[attr-defined]
        else:
            argv = [*(cmd or _platform_opener()), str(target)]
            logger.debug("Launching %s", argv)
            subprocess.Popen(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
    except OSError as exc:
        logger.debug("Editor launch failed for %s: %s", target, exc)
        return f"Failed to open file: {exc}"
    return None
