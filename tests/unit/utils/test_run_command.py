"""Unit tests for the probe subprocess helper."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from diskcare.utils.shell import PROBE_TIMEOUT_SECONDS, CommandResult, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code 0 counts as success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True

    def test_failure(self) -> None:
        """Any non-zero exit code is a failure."""
        assert CommandResult(stdout="", stderr="boom", returncode=1).success is False


class TestRunCommand:
    """Tests for run_command."""

    @patch("diskcare.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """stdout, stderr, and the exit code are carried over."""
        mock_run.return_value = MagicMock(stdout="/home/u/.npm\n", stderr="", returncode=0)

        result = run_command(["npm", "config", "get", "cache"])

        assert result == CommandResult(stdout="/home/u/.npm\n", stderr="", returncode=0)
        mock_run.assert_called_once_with(
            ["npm", "config", "get", "cache"],
            capture_output=True,
            text=True,
            check=False,
            timeout=PROBE_TIMEOUT_SECONDS,
        )

    @patch("diskcare.utils.shell.subprocess.run")
    def test_nonzero_exit_is_not_raised(self, mock_run: MagicMock) -> None:
        """A failing command returns a result instead of raising."""
        mock_run.return_value = MagicMock(stdout="", stderr="nope", returncode=127)

        result = run_command(["npm", "--version"], timeout=1.0)

        assert result.returncode == 127
        assert not result.success

    @patch("diskcare.utils.shell.subprocess.run")
    def test_missing_executable_propagates(self, mock_run: MagicMock) -> None:
        """FileNotFoundError reaches the caller."""
        mock_run.side_effect = FileNotFoundError("npm")

        with pytest.raises(FileNotFoundError):
            run_command(["npm"])

    @patch("diskcare.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        """TimeoutExpired reaches the caller."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="npm", timeout=1.0)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["npm"], timeout=1.0)
