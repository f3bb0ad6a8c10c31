"""Unit tests for the docker command runner."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from agentmounts.orchestration.docker import DockerCommandError, DockerRunner
from agentmounts.utils.shell import CommandResult

OK = CommandResult(stdout="ok\n", stderr="", returncode=0)
FAILED = CommandResult(stdout="", stderr="no such container", returncode=1)


class TestRun:
    """Tests for DockerRunner.run."""

    @patch("agentmounts.orchestration.docker.run_command")
    def test_prefixes_executable(self, mock_run: MagicMock) -> None:
        """Arguments are passed after the docker executable."""
        mock_run.return_value = OK

        result = DockerRunner().run(["volume", "create", "data"])

        mock_run.assert_called_once_with(["docker", "volume", "create", "data"], timeout=60.0)
        assert result == OK

    @patch("agentmounts.orchestration.docker.run_command")
    def test_records_issued_commands(self, mock_run: MagicMock) -> None:
        """Every command is recorded in order."""
        mock_run.return_value = OK
        runner = DockerRunner()

        runner.run(["ps"])
        runner.run(["images"])

        assert runner.issued == [["docker", "ps"], ["docker", "images"]]

    @patch("agentmounts.orchestration.docker.run_command")
    def test_dry_run_executes_nothing(self, mock_run: MagicMock) -> None:
        """In dry-run mode commands are only recorded."""
        runner = DockerRunner(dry_run=True)

        result = runner.run(["run", "-d", "image"])

        mock_run.assert_not_called()
        assert result.success
        assert runner.issued == [["docker", "run", "-d", "image"]]

    @patch("agentmounts.orchestration.docker.run_command")
    def test_failure_raises(self, mock_run: MagicMock) -> None:
        """A non-zero exit raises with the captured result."""
        mock_run.return_value = FAILED

        with pytest.raises(DockerCommandError, match="no such container") as exc_info:
            DockerRunner().run(["rm", "box"])

        assert exc_info.value.result == FAILED
        assert exc_info.value.command == ["docker", "rm", "box"]

    @patch("agentmounts.orchestration.docker.run_command")
    def test_allowed_failure_returns_result(self, mock_run: MagicMock) -> None:
        """allow_failure returns the failed result instead of raising."""
        mock_run.return_value = FAILED

        result = DockerRunner().run(["rm", "box"], allow_failure=True)

        assert not result.success

    @patch("agentmounts.orchestration.docker.run_command")
    def test_timeout_raises(self, mock_run: MagicMock) -> None:
        """A timeout is a failure."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="docker", timeout=60)

        with pytest.raises(DockerCommandError, match="timed out"):
            DockerRunner().run(["stop", "box"])

    @patch("agentmounts.orchestration.docker.run_command")
    def test_allowed_timeout_returns_failure(self, mock_run: MagicMock) -> None:
        """An allowed timeout comes back as a failed result."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="docker", timeout=60)

        result = DockerRunner().run(["stop", "box"], allow_failure=True)

        assert result.returncode == 1

    @patch("agentmounts.orchestration.docker.run_command")
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        """A missing docker binary always raises."""
        mock_run.side_effect = FileNotFoundError("docker")

        with pytest.raises(DockerCommandError, match="Cannot run docker"):
            DockerRunner().run(["ps"], allow_failure=True)

    @patch("agentmounts.orchestration.docker.run_command")
    def test_custom_timeout(self, mock_run: MagicMock) -> None:
        """The timeout is passed through."""
        mock_run.return_value = OK

        DockerRunner().run(["exec", "box", "true"], timeout=None)

        assert mock_run.call_args.kwargs["timeout"] is None


class TestHelpers:
    """Tests for ensure_volume and remove_container."""

    @patch("agentmounts.orchestration.docker.run_command")
    def test_ensure_volume_ignores_failure(self, mock_run: MagicMock) -> None:
        """An existing volume is not an error."""
        mock_run.return_value = FAILED

        DockerRunner().ensure_volume("data")

        mock_run.assert_called_once()

    @patch("agentmounts.orchestration.docker.run_command")
    def test_remove_container_stops_then_removes(self, mock_run: MagicMock) -> None:
        """Containers are stopped and removed, failures ignored."""
        mock_run.return_value = FAILED
        runner = DockerRunner()

        runner.remove_container("box")

        assert runner.issued == [["docker", "stop", "box"], ["docker", "rm", "box"]]

    def test_remove_container_without_name(self) -> None:
        """An empty name issues nothing."""
        runner = DockerRunner(dry_run=True)

        runner.remove_container("")

        assert runner.issued == []
