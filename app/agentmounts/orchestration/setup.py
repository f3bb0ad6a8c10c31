"""Two-phase sandbox setup.

Phase one starts a disposable scan container with wide mounts (the host
root at /host plus drive mounts) and runs ``agentmounts scan`` inside it.
Phase two reads the registry the scan wrote, narrows the mounts to the
discovered workspaces, and starts the workload container with only those.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field

from agentmounts.core.paths import WORKSPACES_FILENAME, state_dir_under
from agentmounts.core.settings import Settings
from agentmounts.mounts.models import MountSpec
from agentmounts.mounts.planner import (
    MountPlan,
    build_mount_plan,
    flatten_mounts,
    require_scan_mounts,
)
from agentmounts.orchestration.docker import DockerRunner
from agentmounts.registry.models import parse_workspaces_file

logger = logging.getLogger(__name__)

# Volume mount points inside both containers
CONTAINER_DATA_DIR = "/data"
CONTAINER_STATE_HOME = "/var/lib/agentmounts"

# Port the application listens on inside the scan container
SCAN_CONTAINER_PORT = "8080"


@dataclass(frozen=True, slots=True)
class SetupResult:
    """Outcome of a setup run.

    Attributes:
        wide_mounts: Mounts used by the scan container.
        discovered: Workspace paths read back from the scan (scan namespace).
        plan: Mount plan applied to the workload container.
        scan_output: Combined stdout/stderr of the in-container scan.
    """

    wide_mounts: tuple[MountSpec, ...]
    discovered: tuple[str, ...]
    plan: MountPlan
    scan_output: str = ""

    @property
    def fell_back(self) -> bool:
        """True when the workload kept the wide mounts."""
        return not self.plan.narrowed


def _log_step(message: str) -> None:
    logger.info(message)


def _log_output(output: str) -> None:
    logger.debug("Scan output:\n%s", output)


@dataclass
class SetupOrchestrator:
    """Drives the scan container and the workload container.

    Attributes:
        settings: Effective settings (names, image, port, depth).
        runner: Docker command runner.
        on_step: Called with a heading before each step.
        on_output: Called with the in-container scan output.
        exists: Host-side existence check used for planning.
    """

    settings: Settings
    runner: DockerRunner = field(default_factory=DockerRunner)
    on_step: Callable[[str], None] = _log_step
    on_output: Callable[[str], None] = _log_output
    exists: Callable[[str], bool] = os.path.exists

    @property
    def registry_path(self) -> str:
        """Registry location inside the containers."""
        return f"{state_dir_under(CONTAINER_STATE_HOME)}/{WORKSPACES_FILENAME}"

    def run(self) -> SetupResult:
        """Run the full setup.

        Returns:
            SetupResult describing mounts and discoveries.

        Raises:
            NoMountsAvailableError: If no wide mount can be established.
            DockerCommandError: If a required docker command fails.
        """
        settings = self.settings
        wide_mounts = require_scan_mounts(settings, exists=self.exists)

        self.on_step("Ensuring volumes")
        self.runner.ensure_volume(settings.data_volume)
        self.runner.ensure_volume(settings.workspaces_volume)

        self.on_step("Stopping existing containers")
        self.runner.remove_container(settings.container)
        self.runner.remove_container(settings.scan_container)

        self.on_step("Starting temporary scanner container")
        try:
            self.runner.run(self._scan_container_args(wide_mounts))

            self.on_step("Running agent scan")
            scan_result = self.runner.run(self._scan_exec_args(wide_mounts), timeout=None)
            scan_output = scan_result.output
            if scan_output:
                self.on_output(scan_output)

            self.on_step("Reading discovered workspaces")
            raw = self.runner.run(
                ["exec", settings.scan_container, "cat", self.registry_path],
                allow_failure=True,
            )
        finally:
            self.on_step("Stopping scanner container")
            self.runner.remove_container(settings.scan_container)

        records = parse_workspaces_file(raw.stdout if raw.success else "")
        discovered = tuple(entry.path for entry in records.workspaces)
        if not discovered:
            logger.warning("No workspaces discovered. Keeping wide mounts.")

        self.on_step("Building mount plan")
        plan = build_mount_plan(discovered, wide_mounts, exists=self.exists)

        count = len(plan.mounts)
        noun = "mount" if count == 1 else "mounts"
        self.on_step(f"Starting {settings.container} with {count} workspace {noun}")
        self.runner.run(self._run_container_args(list(plan.mounts)))

        self.on_step("Done")
        return SetupResult(
            wide_mounts=tuple(wide_mounts),
            discovered=discovered,
            plan=plan,
            scan_output=scan_output,
        )

    def _volume_args(self) -> list[str]:
        settings = self.settings
        return [
            "-v",
            f"{settings.data_volume}:{CONTAINER_DATA_DIR}",
            "-v",
            f"{settings.workspaces_volume}:{CONTAINER_STATE_HOME}",
        ]

    def _scan_container_args(self, wide_mounts: list[MountSpec]) -> list[str]:
        return [
            "run",
            "-d",
            "--name",
            self.settings.scan_container,
            "-e",
            f"PORT={SCAN_CONTAINER_PORT}",
            *self._volume_args(),
            *flatten_mounts(wide_mounts),
            self.settings.image,
            "sh",
            "-c",
            "sleep infinity",
        ]

    def _scan_exec_args(self, wide_mounts: list[MountSpec]) -> list[str]:
        scan_roots = [mount.dest for mount in wide_mounts]
        return [
            "exec",
            "-e",
            f"XDG_STATE_HOME={CONTAINER_STATE_HOME}",
            self.settings.scan_container,
            "agentmounts",
            "--verbose",
            "scan",
            "--max-depth",
            str(self.settings.max_depth),
            *scan_roots,
        ]

    def _run_container_args(self, mounts: list[MountSpec]) -> list[str]:
        port = self.settings.port
        return [
            "run",
            "-d",
            "--name",
            self.settings.container,
            "-p",
            f"{port}:{port}",
            "-e",
            f"PORT={port}",
            "-e",
            f"XDG_STATE_HOME={CONTAINER_STATE_HOME}",
            *self._volume_args(),
            *flatten_mounts(mounts),
            self.settings.image,
        ]
