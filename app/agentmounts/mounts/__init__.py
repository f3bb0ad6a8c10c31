"""Mount planning.

Translates workspace paths discovered inside the wide scan container back
to host paths and builds the narrow mount list for the workload container.
"""

from agentmounts.mounts.models import MountSpec
from agentmounts.mounts.planner import (
    DRIVE_MOUNTS,
    HOST_ROOT_MOUNT,
    MountPlan,
    NoMountsAvailableError,
    build_mount_plan,
    dedupe_mounts,
    detect_scan_mounts,
    flatten_mounts,
    map_workspace_path,
    plan_mounts,
    require_scan_mounts,
)

__all__ = [
    "DRIVE_MOUNTS",
    "HOST_ROOT_MOUNT",
    "MountPlan",
    "MountSpec",
    "NoMountsAvailableError",
    "build_mount_plan",
    "dedupe_mounts",
    "detect_scan_mounts",
    "flatten_mounts",
    "map_workspace_path",
    "plan_mounts",
    "require_scan_mounts",
]
