"""Unit tests for shared CLI helpers."""

from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from agentmounts.cli.main import app
from agentmounts.cli.types import get_settings
from agentmounts.core.settings import Settings


@pytest.fixture
def ctx(isolated_env: Path) -> typer.Context:
    return typer.Context(typer.main.get_command(app))


class TestGetSettings:
    """Tests for get_settings."""

    def test_loads_once_and_caches(self, ctx: typer.Context) -> None:
        """Settings are loaded on first use and reused afterwards."""
        with patch("agentmounts.cli.types.load_settings", return_value=Settings()) as load:
            first = get_settings(ctx)
            second = get_settings(ctx)

        assert first is second
        load.assert_called_once_with()
        assert ctx.obj["settings"] is first

    def test_invalid_file_exits(self, ctx: typer.Context, isolated_env: Path) -> None:
        """A settings file that fails to load ends the command with code 1."""
        config = isolated_env / "config" / "agentmounts" / "config.toml"
        config.parent.mkdir(parents=True)
        config.write_text('colour = "blue"\n')

        with pytest.raises(typer.Exit) as exc_info:
            get_settings(ctx)

        assert exc_info.value.exit_code == 1
        assert ctx.obj.get("settings") is None
