"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

_SCAN_ENV_VARS = (
    "AGENT_SCAN_ROOTS",
    "AGENT_SCAN_EXTRA_ROOTS",
    "AGENT_SCAN_MAX_DEPTH",
    "AGENT_SCAN_INCLUDE_ROOT",
    "AGENTMOUNTS_CONTAINER",
    "AGENTMOUNTS_IMAGE",
    "AGENTMOUNTS_DATA_VOLUME",
    "AGENTMOUNTS_WORKSPACES_VOLUME",
    "PORT",
)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/state at tmp_path and clear scan-related variables.

    Returns:
        The temporary base directory.
    """
    for name in _SCAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def make_workspace(tmp_path: Path) -> Callable[[str], Path]:
    """Factory creating ``<relative>/.claude/agents`` under tmp_path.

    Returns:
        Function that creates a workspace and returns its directory.
    """

    def _make(relative: str) -> Path:
        workspace = tmp_path / relative
        (workspace / ".claude" / "agents").mkdir(parents=True)
        return workspace

    return _make
