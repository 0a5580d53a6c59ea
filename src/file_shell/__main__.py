"""Allow ``python -m file_shell``."""

from file_shell.cli import app

app()
