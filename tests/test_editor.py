"""Tests for external program launch."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from file_shell.editor import editor_command, launch_editor


class TestEditorCommand:
    """Tests for editor command selection."""

    def test_explicit_command_is_split(self) -> None:
        """Test an explicit command is split like a shell command line."""
        assert editor_command("'my editor' --new-window") == ["my editor", "--new-window"]

    def test_terminal_editor_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test $VISUAL/$EDITOR do not replace the platform opener."""
        monkeypatch.setenv("VISUAL", "vim")
        monkeypatch.setenv("EDITOR", "nano")

        assert editor_command() is None

    def test_blank_command_ignored(self) -> None:
        """Test a blank setting falls through to the platform opener."""
        assert editor_command("   ") is None


class TestLaunchEditor:
    """Tests for launch_editor."""

    def test_explicit_command_spawns_without_waiting(self, tmp_path: Path) -> None:
        """Test an explicit command is spawned with Popen and never waited on."""
        target = tmp_path / "notes.txt"

        with patch("file_shell.editor.subprocess.Popen") as popen:
            error = launch_editor(target, cwd=tmp_path, command="gedit")

        assert error is None
        popen.assert_called_once()
        args, kwargs = popen.call_args
        assert args[0] == ["gedit", str(target)]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["start_new_session"] is True
        popen.return_value.wait.assert_not_called()

    @pytest.mark.skipif(sys.platform == "win32", reason="uses os.startfile on Windows")
    def test_platform_opener_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test xdg-open is used on Linux even when $EDITOR is set."""
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("EDITOR", "vim")
        target = tmp_path / "notes.txt"

        with patch("file_shell.editor.subprocess.Popen") as popen:
            launch_editor(target)

        assert popen.call_args[0][0] == ["xdg-open", str(target)]
        assert popen.call_args[1]["stdin"] is subprocess.DEVNULL

    @pytest.mark.skipif(sys.platform == "win32", reason="uses os.startfile on Windows")
    def test_macos_opener(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test open is used on macOS."""
        monkeypatch.setattr(sys, "platform", "darwin")
        target = tmp_path / "notes.txt"

        with patch("file_shell.editor.subprocess.Popen") as popen:
            launch_editor(target)

        assert popen.call_args[0][0] == ["open", str(target)]

    def test_missing_program_returns_message(self, tmp_path: Path) -> None:
        """Test a spawn failure is returned as a message, not raised."""
        with patch(
            "file_shell.editor.subprocess.Popen",
            side_effect=FileNotFoundError(2, "No such file or directory"),
        ):
            error = launch_editor(tmp_path / "notes.txt", command="no-such-editor")

        assert error is not None
        assert error.startswith("Failed to open file:")
