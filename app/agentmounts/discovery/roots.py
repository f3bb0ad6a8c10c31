"""Scan root resolution.

Decides which directories the crawler starts from and how deep it may go.
Root sources, first non-empty wins:

1. Paths given on the command line
2. Settings.scan_roots (AGENT_SCAN_ROOTS or config.toml)
3. Platform defaults (cwd, home, common container/host mount points)

Settings.extra_roots are appended whatever the winning source.
"""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
import string
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from agentmounts.discovery.models import ResolvedRoots
from agentmounts.discovery.normalize import DRIVE_MOUNT_PREFIX, normalize_input_path

if TYPE_CHECKING:
    from agentmounts.core.settings import Settings

logger = logging.getLogger(__name__)

# Drive letters probed on Windows and mirrored under /mnt and /host_mnt elsewhere
_DRIVE_LETTERS = string.ascii_lowercase[2:]

_POSIX_CANDIDATES: tuple[str, ...] = (
    "/workspaces",
    "/workspace",
    "/workdir",
    "/host",
    "/host_mnt",
    "/data",
    "/opt",
)


def parse_max_depth(value: str | None, default: int) -> int:
    """Parse a depth budget, falling back to default on bad input.

    Args:
        value: Raw value from a flag or environment variable.
        default: Depth to use when value is missing or invalid.

    Returns:
        A non-negative depth.
    """
    if value is None or not value.strip():
        return default
    try:
        depth = int(value.strip())
    except ValueError:
        logger.warning("Ignoring invalid max depth %r, using %d", value, default)
        return default
    if depth < 0:
        logger.warning("Ignoring negative max depth %d, using %d", depth, default)
        return default
    return depth


def resolve_roots(
    cli_roots: list[str],
    settings: Settings,
    *,
    cli_max_depth: str | None = None,
    cwd: str | None = None,
    home: str | None = None,
    exists: Callable[[str], bool] = os.path.exists,
) -> ResolvedRoots:
    """Resolve the scan roots and depth budget for a crawl.

    Args:
        cli_roots: Root paths given on the command line.
        settings: Effective settings.
        cli_max_depth: Raw --max-depth value, if given.
        cwd: Working directory used for defaults and relative roots.
        home: Home directory used for defaults and the empty-set fallback.
        exists: Existence check for default candidates.

    Returns:
        ResolvedRoots with at least one root.
    """
    cwd = cwd if cwd is not None else os.getcwd()
    home = home if home is not None else str(Path.home())
    windows = settings.windows

    explicit = [normalize_input_path(r, windows=windows) for r in cli_roots]
    explicit = [r for r in explicit if r]
    configured = [normalize_input_path(r, windows=windows) for r in settings.scan_roots]
    configured = [r for r in configured if r]

    if explicit:
        base = explicit
    elif configured:
        base = configured
    else:
        base = get_default_roots(settings, cwd=cwd, home=home, exists=exists)

    extra = list(settings.extra_roots)

    roots: dict[str, None] = {}
    for raw in [*base, *extra]:
        normalized = normalize_input_path(raw, windows=windows)
        if not normalized:
            continue
        roots.setdefault(_absolute(normalized, cwd, windows=windows), None)

    if not roots:
        roots[home] = None

    max_depth = parse_max_depth(cli_max_depth, settings.max_depth)
    return ResolvedRoots(roots=tuple(roots), max_depth=max_depth)


def get_default_roots(
    settings: Settings,
    *,
    cwd: str,
    home: str,
    exists: Callable[[str], bool] = os.path.exists,
) -> list[str]:
    """Compute the platform default roots.

    Scanning "/" is opt-in (Settings.include_root) because a full
    filesystem walk is slow and reaches into system directories.

    Args:
        settings: Effective settings.
        cwd: Current working directory.
        home: Home directory.
        exists: Existence check for candidates.

    Returns:
        Default roots in probe order, without duplicates.
    """
    defaults: dict[str, None] = {}
    if cwd:
        defaults[cwd] = None
    defaults[home] = None

    if settings.windows:
        for root in _windows_drive_roots(settings, exists):
            defaults.setdefault(root, None)
    else:
        candidates = list(_POSIX_CANDIDATES)
        for letter in _DRIVE_LETTERS:
            candidates.append(f"{DRIVE_MOUNT_PREFIX}/{letter}")
            candidates.append(f"/host_mnt/{letter}")
        for candidate in candidates:
            if exists(candidate):
                defaults.setdefault(candidate, None)

        if settings.include_root and exists("/"):
            defaults.setdefault("/", None)

    return list(defaults)


def _windows_drive_roots(settings: Settings, exists: Callable[[str], bool]) -> list[str]:
    """List existing drive roots plus the user's home locations."""
    roots: list[str] = []
    for letter in _DRIVE_LETTERS:
        candidate = f"{letter.upper()}:\\"
        if exists(candidate):
            roots.append(candidate)
    for home in (settings.home_drive_path, settings.user_profile):
        if home and exists(home) and home not in roots:
            roots.append(home)
    return roots


def _absolute(path: str, cwd: str, *, windows: bool) -> str:
    """Make a path absolute against cwd without touching the filesystem."""
    flavour = ntpath if windows else posixpath
    return flavour.normpath(flavour.join(cwd, path))
