"""Unit tests for the root CLI application."""

from pathlib import Path

import pytest
from agentmounts import __version__
from agentmounts.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _env(isolated_env: Path) -> Path:
    return isolated_env


def _write_broken_config(base: Path) -> None:
    config = base / "config" / "agentmounts" / "config.toml"
    config.parent.mkdir(parents=True)
    config.write_text("max_depth = = 1\n")


class TestRootCommand:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        """--help shows every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for name in ("scan", "plan", "setup", "workspaces", "config"):
            assert name in result.output

    def test_invalid_settings_file(self, isolated_env: Path) -> None:
        """A broken config file aborts commands that need settings."""
        _write_broken_config(isolated_env)

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_registry_commands_ignore_settings(self, isolated_env: Path) -> None:
        """Commands that never read settings still run with a broken config file."""
        _write_broken_config(isolated_env)

        result = runner.invoke(app, ["workspaces", "list"])

        assert result.exit_code == 0
        assert "No workspaces registered" in result.output
