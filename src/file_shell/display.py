"""Rich output components for the shell and the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from file_shell.items import SIZE_UNKNOWN

if TYPE_CHECKING:
    from collections.abc import Sequence

    from file_shell.items import FileSystemItem

DATE_FORMAT = "%Y-%m-%d %H:%M"

HELP_ENTRIES = [
    ("ls / dir [path]", "list directory contents"),
    ("cd <path>", "change directory (.. goes up)"),
    ("pwd", "print the current directory"),
    ("mkdir <name>", "create a directory"),
    ("touch <name>", "create an empty file"),
    ("cp <src> <dst> [-f]", "copy a file or directory (-f overwrites)"),
    ("mv <src> <dst>", "move or rename a file or directory"),
    ("del / rm <path>", "delete a file or directory"),
    ("info <path>", "show details and total size"),
    ("edit <name>", "open a file in an external program"),
    ("clear", "clear the screen"),
    ("help", "show this help"),
    ("exit", "quit"),
]


def format_size(item: FileSystemItem) -> str:
    """Size column for directory listings."""
    if item.is_directory:
        return "<DIR>"
    return f"{item.size} bytes"


class Display:
    """Terminal output for file-shell."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to a new stdout console.
        """
        self.console = console or Console()

    def show_welcome(self) -> None:
        """Display welcome banner."""
        self.console.print("[bold blue]file-shell[/bold blue] - interactive file manager")
        self.console.print("Type [bold]help[/bold] for a list of commands.")
        self.console.print()

    def show_items(self, items: Sequence[FileSystemItem]) -> None:
        """Display a directory listing.

        Args:
            items: Items of one directory, in listing order.
        """
        if not items:
            self.console.print("(empty)")
            return

        table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
        table.add_column("Type", min_width=8)
        table.add_column("Name", style="cyan", min_width=30, overflow="fold")
        table.add_column("Size", min_width=12)
        table.add_column("Created", no_wrap=True)

        for item in items:
            table.add_row(
                "DIR" if item.is_directory else "FILE",
                escape(item.name),
                escape(format_size(item)),
                item.creation_time.strftime(DATE_FORMAT),
            )

        self.console.print(table)

    def show_item(self, item: FileSystemItem) -> None:
        """Display details of a single item, including its total size.

        Args:
            item: File or directory to describe.
        """
        size = item.size
        size_text = "unknown (access denied)" if size == SIZE_UNKNOWN else f"{size} bytes"

        table = Table(box=None, show_header=False)
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Name", escape(item.name))
        table.add_row("Type", "DIR" if item.is_directory else "FILE")
        table.add_row("Path", escape(str(item.full_path)))
        table.add_row("Size", size_text)
        table.add_row("Created", item.creation_time.strftime(DATE_FORMAT))
        self.console.print(table)

    def show_help(self) -> None:
        """Display the command summary."""
        self.console.print("\n[bold]Available commands[/bold]")
        for usage, description in HELP_ENTRIES:
            self.console.print(f"  {escape(usage):<22} {description}")
        self.console.print()

    def show_text(self, text: str) -> None:
        """Print plain text without markup interpretation."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def clear(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", soft_wrap=True)

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {escape(message)}", soft_wrap=True)
