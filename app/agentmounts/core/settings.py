"""Runtime settings for agentmounts.

Settings are built once at process start from three layers, highest
precedence first:

1. Environment variables (AGENT_SCAN_*, AGENTMOUNTS_*, PORT)
2. The optional TOML file at ~/.config/agentmounts/config.toml
3. Built-in defaults

The resulting Settings value is passed explicitly to the root resolver,
the crawler and the mount planner; none of them read the environment.
"""

import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agentmounts.core.paths import get_config_path
from agentmounts.discovery.normalize import split_roots_input
from agentmounts.discovery.roots import parse_max_depth
from agentmounts.discovery.skip import DEFAULT_SKIP_DIR_NAMES, DEFAULT_SKIP_PREFIXES

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8

ENV_SCAN_ROOTS = "AGENT_SCAN_ROOTS"
ENV_EXTRA_ROOTS = "AGENT_SCAN_EXTRA_ROOTS"
ENV_MAX_DEPTH = "AGENT_SCAN_MAX_DEPTH"
ENV_INCLUDE_ROOT = "AGENT_SCAN_INCLUDE_ROOT"

# Environment variable -> settings field for plain string overrides
_ENV_STRING_FIELDS: dict[str, str] = {
    "AGENTMOUNTS_CONTAINER": "container",
    "AGENTMOUNTS_IMAGE": "image",
    "PORT": "port",
    "AGENTMOUNTS_DATA_VOLUME": "data_volume",
    "AGENTMOUNTS_WORKSPACES_VOLUME": "workspaces_volume",
}

# Fields that may appear in config.toml. Platform facts are never persisted.
PERSISTED_FIELDS: tuple[str, ...] = (
    "scan_roots",
    "extra_roots",
    "max_depth",
    "include_root",
    "skip_dir_names",
    "skip_prefixes",
    "container",
    "image",
    "port",
    "data_volume",
    "workspaces_volume",
)


class Settings(BaseModel):
    """Effective configuration for one agentmounts run.

    Attributes:
        scan_roots: Roots used when none are given on the command line.
        extra_roots: Roots always appended to the resolved set.
        max_depth: Default traversal depth budget.
        include_root: Allow "/" among the POSIX default roots.
        windows: True when running on a drive-letter platform.
        home_drive_path: HOMEDRIVE + HOMEPATH on Windows, if set.
        user_profile: USERPROFILE on Windows, if set.
        skip_dir_names: Directory names never descended into.
        skip_prefixes: Absolute path prefixes never read.
        container: Name of the long-running workload container.
        image: Image used for both scan and workload containers.
        port: Port published by the workload container.
        data_volume: Named volume mounted at /data.
        workspaces_volume: Named volume holding the workspace registry.
    """

    model_config = ConfigDict(extra="forbid")

    scan_roots: list[str] = Field(default_factory=list)
    extra_roots: list[str] = Field(default_factory=list)
    max_depth: Annotated[int, Field(ge=0, description="Traversal depth budget")] = (
        DEFAULT_MAX_DEPTH
    )
    include_root: bool = False
    windows: bool = False
    home_drive_path: str | None = None
    user_profile: str | None = None
    skip_dir_names: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_DIR_NAMES))
    skip_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_PREFIXES))
    container: str = "agentmounts-dev"
    image: str = "agentmounts:latest"
    port: str = "8080"
    data_volume: str = "agentmounts-data"
    workspaces_volume: str = "agentmounts-workspaces"

    @property
    def scan_container(self) -> str:
        """Name of the disposable container used for the wide scan."""
        return f"{self.container}-scan"


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    config_path: Path | None = None,
    platform: str | None = None,
    read_file: bool = True,
) -> Settings:
    """Build the effective Settings for this process.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        config_path: Settings file. Defaults to ~/.config/agentmounts/config.toml.
        platform: Platform identifier. Defaults to sys.platform.
        read_file: Merge the settings file. When False only the environment
            and defaults are used.

    Returns:
        Validated Settings.

    Raises:
        SettingsParseError: If the settings file is not valid TOML.
        SettingsError: If the merged values do not match the schema.
    """
    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    data = _read_settings_file(config_path or get_config_path()) if read_file else {}

    roots = split_roots_input(env.get(ENV_SCAN_ROOTS))
    if roots:
        data["scan_roots"] = roots
    extra = split_roots_input(env.get(ENV_EXTRA_ROOTS))
    if extra:
        data["extra_roots"] = extra

    file_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
    if not isinstance(file_depth, int) or file_depth < 0:
        raise SettingsError(f"max_depth must be a non-negative integer, got {file_depth!r}")
    data["max_depth"] = parse_max_depth(env.get(ENV_MAX_DEPTH), file_depth)

    if ENV_INCLUDE_ROOT in env:
        data["include_root"] = env[ENV_INCLUDE_ROOT] == "true"

    for env_var, field_name in _ENV_STRING_FIELDS.items():
        if env.get(env_var):
            data[field_name] = env[env_var]

    data["windows"] = platform == "win32"
    if data["windows"]:
        drive, home_path = env.get("HOMEDRIVE"), env.get("HOMEPATH")
        if drive and home_path:
            data["home_drive_path"] = f"{drive}{home_path}"
        if env.get("USERPROFILE"):
            data["user_profile"] = env["USERPROFILE"]

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e


def _read_settings_file(path: Path) -> dict[str, object]:
    """Read the persisted subset of settings from TOML.

    A missing file yields an empty mapping.
    """
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings file: {e}") from e

    unknown = sorted(set(data) - set(PERSISTED_FIELDS))
    if unknown:
        raise SettingsError(f"Unknown settings in {path}: {', '.join(unknown)}")

    logger.debug("Loaded settings from %s", path)

    return dict(data)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write the persisted subset of settings to a TOML file.

    The file is written atomically via a temporary file and os.replace().

    Args:
        settings: Settings to save.
        path: Target path. Defaults to ~/.config/agentmounts/config.toml.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    data = settings.model_dump(include=set(PERSISTED_FIELDS))

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings file: {e}") from e

    return config_path
