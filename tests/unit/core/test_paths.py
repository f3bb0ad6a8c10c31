"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from agentmounts.core.paths import (
    APP_NAME,
    ensure_state_dir,
    get_config_dir,
    get_config_path,
    get_state_dir,
    get_workspaces_path,
    state_dir_under,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestGetStateDir:
    """Tests for get_state_dir function."""

    def test_default_state_dir(self) -> None:
        """get_state_dir returns default path when XDG_STATE_HOME not set."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": ""}):
            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_respects_xdg_state_home(self, tmp_path: Path) -> None:
        """get_state_dir respects XDG_STATE_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = get_state_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_config_path(self, tmp_path: Path) -> None:
        """Settings live in config.toml under the config dir."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_workspaces_path(self, tmp_path: Path) -> None:
        """The registry lives in workspaces.json under the state dir."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            assert get_workspaces_path() == tmp_path / APP_NAME / "workspaces.json"

    @pytest.mark.parametrize("home", ["/var/lib/agentmounts", "/var/lib/agentmounts/"])
    def test_state_dir_under(self, home: str) -> None:
        """state_dir_under mirrors get_state_dir for another environment."""
        assert state_dir_under(home) == "/var/lib/agentmounts/agentmounts"


class TestEnsureStateDir:
    """Tests for ensure_state_dir function."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        """ensure_state_dir creates the directory tree."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path / "nested")}):
            result = ensure_state_dir()

        assert result.is_dir()
        assert result == tmp_path / "nested" / APP_NAME

    def test_raises_runtime_error_on_permission(self, tmp_path: Path) -> None:
        """Permission problems surface as RuntimeError."""
        with (
            patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}),
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_state_dir()
