"""Shared test fixtures."""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from file_shell.context import AppContext
from file_shell.display import Display
from file_shell.filesystem import RealFileSystem
from file_shell.memory import MemoryFileSystem

FIXED_TIME = datetime(2024, 3, 5, 14, 7, 30)


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def real_fs(tmp_path: Path) -> RealFileSystem:
    """Create an OS-backed filesystem rooted at a temporary directory."""
    return RealFileSystem(cwd=tmp_path)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create an in-memory filesystem starting in /home/user."""
    return MemoryFileSystem(cwd="/home/user", clock=lambda: FIXED_TIME)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree with nested content.

    Layout:
        source/a.txt            (10 bytes)
        source/sub/b.txt        (20 bytes)
        source/sub/deeper/c.txt ("deep")
    """
    root = tmp_path / "source"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "sub" / "b.txt").write_bytes(b"y" * 20)
    (root / "sub" / "deeper" / "c.txt").write_text("deep")
    return root


# ============================================================================
# Output Fixtures
# ============================================================================


@pytest.fixture
def console() -> Console:
    """Create a wide, colorless console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def output(console: Console):
    """Return a callable giving everything printed to the console so far."""
    return lambda: console.file.getvalue()


# ============================================================================
# App Context Fixtures
# ============================================================================


@pytest.fixture
def mock_launcher() -> MagicMock:
    """Create a mock editor launcher that reports success."""
    return MagicMock(return_value=None)


@pytest.fixture
def memory_context(
    memory_fs: MemoryFileSystem, console: Console, mock_launcher: MagicMock
) -> AppContext:
    """Create an AppContext over the in-memory filesystem."""
    return AppContext(
        filesystem=memory_fs,
        display=Display(console),
        launcher=mock_launcher,
    )
