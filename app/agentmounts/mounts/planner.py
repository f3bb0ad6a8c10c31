"""Mount planning between the scan namespace and the host.

The scan container sees the host root at /host and each drive mount
(/mnt/c, ...) and extra root at the same path as on the host. A workspace
discovered at /host/home/me/proj therefore lives at /home/me/proj on the
host, while /mnt/c/proj is the same path on both sides.
"""

import logging
import os
import posixpath
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from agentmounts.core.settings import Settings
from agentmounts.discovery.normalize import normalize_input_path
from agentmounts.mounts.models import MountSpec

logger = logging.getLogger(__name__)

# Where the host's "/" appears inside the scan container
HOST_ROOT_MOUNT = "/host"

# Drive mounts mirrored 1:1 into the scan container when present
DRIVE_MOUNTS: tuple[str, ...] = ("/mnt/c", "/mnt/d", "/mnt/e", "/mnt/f", "/mnt/g")


class NoMountsAvailableError(Exception):
    """Raised when no wide scan mount can be established."""


@dataclass(frozen=True, slots=True)
class MountPlan:
    """Result of narrowing the wide mounts to discovered workspaces.

    Attributes:
        mounts: Mounts for the workload container.
        narrowed: False when the wide mounts were kept.
        missing: Host paths dropped because they do not exist.
    """

    mounts: tuple[MountSpec, ...]
    narrowed: bool
    missing: tuple[str, ...] = field(default_factory=tuple)


def map_workspace_path(namespace_path: str) -> MountSpec:
    """Map a scan-namespace path to its host counterpart.

    This is the inverse of the wide mounts built by detect_scan_mounts():
    /host maps to the host root, /host/<rest> to /<rest>, and any other
    path is a 1:1 mirror.

    Args:
        namespace_path: Absolute path as seen inside the scan container.

    Returns:
        MountSpec with the host source and the namespace path as dest.
    """
    path = posixpath.normpath(namespace_path)
    if path == HOST_ROOT_MOUNT:
        return MountSpec(source="/", dest=HOST_ROOT_MOUNT)
    if path.startswith(f"{HOST_ROOT_MOUNT}/"):
        host_path = path[len(HOST_ROOT_MOUNT) :] or "/"
        return MountSpec(source=host_path, dest=path)
    return MountSpec(source=path, dest=path)


def dedupe_mounts(mounts: Iterable[MountSpec]) -> list[MountSpec]:
    """Drop repeated (source, dest) pairs, keeping first-seen order."""
    seen: dict[tuple[str, str], MountSpec] = {}
    for mount in mounts:
        seen.setdefault((mount.source, mount.dest), mount)
    return list(seen.values())


def flatten_mounts(mounts: Iterable[MountSpec]) -> list[str]:
    """Render mounts as docker ``-v`` arguments."""
    args: list[str] = []
    for mount in mounts:
        args.extend(["-v", mount.as_volume_arg()])
    return args


def build_mount_plan(
    discovered: Iterable[str],
    wide_mounts: Sequence[MountSpec],
    *,
    exists: Callable[[str], bool] = os.path.exists,
) -> MountPlan:
    """Narrow the wide mounts to the discovered workspaces.

    Workspaces whose host path no longer exists are dropped with a warning.
    When nothing was discovered, or every mapping was dropped, the wide
    mounts are kept so the workload never starts without filesystem access.

    Args:
        discovered: Workspace paths in the scan namespace.
        wide_mounts: Mounts used for the scan, in flag order.
        exists: Host-side existence check.

    Returns:
        MountPlan describing the mounts to use.
    """
    specific: list[MountSpec] = []
    missing: list[str] = []
    for namespace_path in discovered:
        mapping = map_workspace_path(namespace_path)
        if not exists(mapping.source):
            logger.warning("Skipping missing host path %s", mapping.source)
            missing.append(mapping.source)
            continue
        specific.append(mapping)

    mounts = dedupe_mounts(specific)
    if not mounts:
        return MountPlan(mounts=tuple(wide_mounts), narrowed=False, missing=tuple(missing))
    return MountPlan(mounts=tuple(mounts), narrowed=True, missing=tuple(missing))


def plan_mounts(
    discovered: Iterable[str],
    wide_mounts: Sequence[MountSpec],
    *,
    exists: Callable[[str], bool] = os.path.exists,
) -> list[MountSpec]:
    """Compute the mount list for the workload container.

    Args:
        discovered: Workspace paths in the scan namespace.
        wide_mounts: Mounts used for the scan, in flag order.
        exists: Host-side existence check.

    Returns:
        Deduplicated narrow mounts, or wide_mounts unchanged when there is
        nothing to narrow to.
    """
    return list(build_mount_plan(discovered, wide_mounts, exists=exists).mounts)


def detect_scan_mounts(
    settings: Settings,
    *,
    exists: Callable[[str], bool] = os.path.exists,
) -> list[MountSpec]:
    """Determine the wide mounts for the scan container.

    Mounts the host root at /host, then every configured scan root and
    extra root that exists, then the drive mounts that exist, each 1:1.

    Args:
        settings: Effective settings.
        exists: Host-side existence check.

    Returns:
        Deduplicated wide mounts, possibly empty.
    """
    mounts: list[MountSpec] = []
    if exists("/"):
        mounts.append(MountSpec(source="/", dest=HOST_ROOT_MOUNT))

    for raw in [*settings.scan_roots, *settings.extra_roots]:
        path = normalize_input_path(raw, windows=settings.windows)
        if path and exists(path):
            mounts.append(MountSpec(source=path, dest=path))

    for path in DRIVE_MOUNTS:
        if exists(path):
            mounts.append(MountSpec(source=path, dest=path))

    return dedupe_mounts(mounts)


def require_scan_mounts(
    settings: Settings,
    *,
    exists: Callable[[str], bool] = os.path.exists,
) -> list[MountSpec]:
    """Like detect_scan_mounts(), but fail when there are none.

    Raises:
        NoMountsAvailableError: If no wide mount can be established.
    """
    mounts = detect_scan_mounts(settings, exists=exists)
    if not mounts:
        msg = (
            "No scan mounts available. "
            "Provide AGENT_SCAN_ROOTS or ensure / and /mnt/ drives exist."
        )
        raise NoMountsAvailableError(msg)
    return mounts
