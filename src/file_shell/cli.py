"""CLI commands using Typer.

Without a subcommand the interactive shell starts. The subcommands run a
single filesystem operation and exit, with status 1 on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from file_shell import __version__
from file_shell.context import create_context
from file_shell.display import Display
from file_shell.errors import FileShellError
from file_shell.shell import Shell

if TYPE_CHECKING:
    from file_shell.context import AppContext

app = typer.Typer(
    name="file-shell",
    help="Interactive command-line file manager",
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"file-shell v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send debug logging to stderr through rich when requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    start_dir: Annotated[
        Path | None,
        typer.Option("--start-dir", "-C", help="Initial working directory"),
    ] = None,
    editor: Annotated[
        str | None,
        typer.Option("--editor", "-e", help="Command used by 'edit' (default: system opener)"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Interactive command-line file manager."""
    _configure_logging(verbose)

    # Tests inject a prepared AppContext through ctx.obj
    if ctx.obj is None:
        try:
            ctx.obj = create_context(start_dir=start_dir, editor=editor)
        except FileShellError as e:
            Display(console).show_error(f"Cannot start: {e}")
            raise typer.Exit(1) from e

    if ctx.invoked_subcommand is None:
        raise typer.Exit(Shell(ctx.obj).run())


@contextmanager
def _reported_errors(app_ctx: AppContext) -> Iterator[None]:
    """Print FileShellError and exit with status 1."""
    try:
        yield
    except FileShellError as e:
        app_ctx.display.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# One-shot Commands
# ============================================================================


@app.command("ls")
def list_directory(
    ctx: typer.Context,
    path: Annotated[str | None, typer.Argument(help="Directory (default: current)")] = None,
) -> None:
    """List directory contents."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    with _reported_errors(app_ctx):
        items = fs.list_items(path or fs.get_current_directory())
    app_ctx.display.show_items(items)


@app.command()
def info(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory")],
) -> None:
    """Show details and total size of a path."""
    app_ctx: AppContext = ctx.obj
    with _reported_errors(app_ctx):
        app_ctx.display.show_item(app_ctx.filesystem.get_item(path))


@app.command("cp")
def copy(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    destination: Annotated[str, typer.Argument(help="Target path")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing files")
    ] = False,
) -> None:
    """Copy a file or merge a directory tree."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    with _reported_errors(app_ctx):
        fs.copy(source, destination, overwrite=force)
    app_ctx.display.show_success(f"Copied: {fs.resolve(source)} -> {fs.resolve(destination)}")


@app.command("mv")
def move(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    destination: Annotated[str, typer.Argument(help="Target path")],
) -> None:
    """Move or rename a file or directory."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    with _reported_errors(app_ctx):
        fs.move(source, destination)
    app_ctx.display.show_success(f"Moved: {fs.resolve(source)} -> {fs.resolve(destination)}")


@app.command("rm")
def remove(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
) -> None:
    """Delete a file or directory tree."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    target = fs.resolve(path)
    if not fs.exists(target):
        app_ctx.display.show_error(f"Path does not exist: {target}")
        raise typer.Exit(1)
    with _reported_errors(app_ctx):
        fs.delete(target)
    app_ctx.display.show_success(f"Deleted: {target}")


@app.command("mkdir")
def make_directory(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to create")],
) -> None:
    """Create a directory and any missing parents."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    with _reported_errors(app_ctx):
        fs.create_directory(path)
    app_ctx.display.show_success(f"Directory created: {fs.resolve(path)}")


@app.command()
def touch(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to create or truncate")],
) -> None:
    """Create an empty file."""
    app_ctx: AppContext = ctx.obj
    fs = app_ctx.filesystem
    with _reported_errors(app_ctx):
        fs.create_file(path)
    app_ctx.display.show_success(f"File created: {fs.resolve(path)}")


if __name__ == "__main__":
    app()
