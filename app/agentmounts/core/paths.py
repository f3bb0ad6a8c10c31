"""XDG-compliant path management for agentmounts.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/agentmounts/
- State: ~/.local/state/agentmounts/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "agentmounts"

WORKSPACES_FILENAME = "workspaces.json"
CONFIG_FILENAME = "config.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/agentmounts/ (or XDG_CONFIG_HOME/agentmounts/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data is the workspace registry written by ``agentmounts scan``.

    Returns:
        Path to ~/.local/state/agentmounts/ (or XDG_STATE_HOME/agentmounts/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/agentmounts/config.toml.
    """
    return get_config_dir() / CONFIG_FILENAME


def get_workspaces_path() -> Path:
    """Get the workspace registry file path.

    Returns:
        Path to ~/.local/state/agentmounts/workspaces.json.
    """
    return get_state_dir() / WORKSPACES_FILENAME


def state_dir_under(xdg_state_home: str) -> str:
    """Build the state directory for a given XDG_STATE_HOME value.

    Used to locate the registry inside a container whose XDG_STATE_HOME
    points at a mounted volume.

    Args:
        xdg_state_home: Value of XDG_STATE_HOME in the target environment.

    Returns:
        POSIX path string of the application state directory.
    """
    return f"{xdg_state_home.rstrip('/')}/{APP_NAME}"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")
