"""Interactive read-execute-print loop.

Each line is split on whitespace, the first token (case-insensitive) picks
the command and the rest are its arguments. Every failure raised while a
command runs is reported and the loop carries on; only ``exit`` (or end of
input) stops it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from file_shell.context import AppContext

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit"})
FORCE_FLAGS = frozenset({"-f", "--force"})

USAGE = {
    "cd": "cd <path>",
    "mkdir": "mkdir <name>",
    "touch": "touch <name>",
    "del": "del <path>",
    "rm": "rm <path>",
    "cp": "cp <source> <destination> [-f]",
    "mv": "mv <source> <destination>",
    "info": "info <path>",
    "edit": "edit <name>",
}


class Shell:
    """Command dispatcher over a FileSystem."""

    def __init__(
        self,
        context: AppContext,
        input_func: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize the shell.

        Args:
            context: Application dependencies.
            input_func: Reads one line given a prompt. Defaults to the
                display console's input.
        """
        self.ctx = context
        self.fs = context.filesystem
        self.display = context.display
        self._input = input_func or self._console_input
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "ls": self._list,
            "dir": self._list,
            "cd": self._change_directory,
            "pwd": self._print_working_directory,
            "mkdir": self._make_directory,
            "touch": self._touch,
            "del": self._delete,
            "rm": self._delete,
            "cp": self._copy,
            "mv": self._move,
            "info": self._info,
            "edit": self._edit,
            "clear": self._clear,
            "help": self._help,
        }

    def _console_input(self, prompt: str) -> str:
        return self.display.console.input(prompt, markup=False)

    def prompt(self) -> str:
        """Prompt text showing the current directory."""
        return f"{self.fs.get_current_directory()}> "

    def run(self) -> int:
        """Run the loop until exit or end of input.

        Returns:
            Process exit code.
        """
        self.display.show_welcome()
        while True:
            try:
                line = self._input(self.prompt())
            except (EOFError, KeyboardInterrupt):
                self.display.console.print()
                return 0
            if not self.execute(line):
                return 0

    def execute(self, line: str) -> bool:
        """Execute one input line.

        Args:
            line: Raw input.

        Returns:
            False when the loop should stop, True otherwise.
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in EXIT_COMMANDS:
            return False

        handler = self._commands.get(command)
        if handler is None:
            self.display.show_error(f"Unknown command: {command}. Type 'help' for a list.")
            return True

        try:
            handler(args)
        except Exception as e:
            logger.debug("Command failed: %s", line, exc_info=True)
            self.display.show_error(f"Error: {e}")
        return True

    def _usage(self, command: str) -> None:
        self.display.show_warning(f"Usage: {USAGE[command]}")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _list(self, args: list[str]) -> None:
        path = args[0] if args else self.fs.get_current_directory()
        self.display.show_items(self.fs.list_items(path))

    def _change_directory(self, args: list[str]) -> None:
        if not args:
            self._usage("cd")
            return
        target = self.fs.resolve(args[0])
        if not self.fs.is_dir(target):
            self.display.show_error(f"Directory not found: {target}")
            return
        self.fs.set_current_directory(target)

    def _print_working_directory(self, args: list[str]) -> None:
        self.display.show_text(str(self.fs.get_current_directory()))

    def _make_directory(self, args: list[str]) -> None:
        if not args:
            self._usage("mkdir")
            return
        target = self.fs.resolve(args[0])
        self.fs.create_directory(target)
        self.display.show_success(f"Directory created: {target}")

    def _touch(self, args: list[str]) -> None:
        if not args:
            self._usage("touch")
            return
        target = self.fs.resolve(args[0])
        self.fs.create_file(target)
        self.display.show_success(f"File created: {target}")

    def _delete(self, args: list[str]) -> None:
        if not args:
            self._usage("del")
            return
        target = self.fs.resolve(args[0])
        if not self.fs.exists(target):
            self.display.show_error(f"Path does not exist: {target}")
            return
        self.fs.delete(target)
        self.display.show_success(f"Deleted: {target}")

    def _copy(self, args: list[str]) -> None:
        overwrite = any(arg in FORCE_FLAGS for arg in args)
        paths = [arg for arg in args if arg not in FORCE_FLAGS]
        if len(paths) != 2:
            self._usage("cp")
            return
        source, destination = (self.fs.resolve(p) for p in paths)
        self.fs.copy(source, destination, overwrite=overwrite)
        self.display.show_success(f"Copied: {source} -> {destination}")

    def _move(self, args: list[str]) -> None:
        if len(args) != 2:
            self._usage("mv")
            return
        source, destination = (self.fs.resolve(p) for p in args)
        self.fs.move(source, destination)
        self.display.show_success(f"Moved: {source} -> {destination}")

    def _info(self, args: list[str]) -> None:
        if not args:
            self._usage("info")
            return
        self.display.show_item(self.fs.get_item(args[0]))

    def _edit(self, args: list[str]) -> None:
        if len(args) != 1:
            self._usage("edit")
            return
        target = self.fs.resolve(args[0])
        if not self.fs.is_file(target):
            self.display.show_error(f"File not found: {target}")
            return
        error = self.ctx.launcher(target, self.fs.get_current_directory(), self.ctx.editor)
        if error:
            self.display.show_error(error)
        else:
            self.display.show_success(f"Opened: {target}")

    def _clear(self, args: list[str]) -> None:
        self.display.clear()

    def _help(self, args: list[str]) -> None:
        self.display.show_help()
