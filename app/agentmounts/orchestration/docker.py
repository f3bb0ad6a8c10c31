"""Docker command execution for sandbox orchestration.

Thin wrapper over run_command() that prefixes ``docker``, records every
issued command, and turns unexpected failures into DockerCommandError.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass, field

from agentmounts.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

# Timeout for short housekeeping commands (volume create, stop, rm, cat)
DEFAULT_TIMEOUT = 60.0


class DockerCommandError(Exception):
    """Raised when a docker command fails and failure was not allowed.

    Attributes:
        command: Full command line that failed.
        result: Captured result, None if the command could not run.
    """

    def __init__(self, message: str, command: list[str], result: CommandResult | None = None):
        super().__init__(message)
        self.command = command
        self.result = result


@dataclass
class DockerRunner:
    """Runs docker commands, or only records them in dry-run mode.

    Attributes:
        dry_run: Record commands without executing them.
        executable: Docker CLI executable name.
        issued: Every command line passed to run(), in order.
    """

    dry_run: bool = False
    executable: str = "docker"
    issued: list[list[str]] = field(default_factory=list)

    def run(
        self,
        args: list[str],
        *,
        allow_failure: bool = False,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> CommandResult:
        """Run ``docker <args>``.

        Args:
            args: Arguments after the docker executable.
            allow_failure: Return non-zero results instead of raising.
            timeout: Seconds to wait, None for no limit.

        Returns:
            CommandResult of the command (empty success in dry-run mode).

        Raises:
            DockerCommandError: If the command fails and allow_failure is False.
        """
        command = [self.executable, *args]
        self.issued.append(command)

        if self.dry_run:
            logger.info("Would run: %s", shlex.join(command))
            return CommandResult(stdout="", stderr="", returncode=0)

        logger.debug("Running: %s", shlex.join(command))
        try:
            result = run_command(command, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            if allow_failure:
                logger.warning("%s timed out after %s seconds", shlex.join(command), timeout)
                return CommandResult(stdout="", stderr=str(e), returncode=1)
            msg = f"{shlex.join(command)} timed out after {timeout} seconds"
            raise DockerCommandError(msg, command) from e
        except (FileNotFoundError, OSError) as e:
            msg = f"Cannot run {self.executable}: {e}"
            raise DockerCommandError(msg, command) from e

        if not result.success and not allow_failure:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            msg = f"{shlex.join(command)} failed: {detail}"
            raise DockerCommandError(msg, command, result)

        return result

    def ensure_volume(self, name: str) -> None:
        """Create a named volume; an existing volume is not an error."""
        self.run(["volume", "create", name], allow_failure=True)

    def remove_container(self, name: str) -> None:
        """Stop and remove a container, ignoring failures."""
        if not name:
            return
        self.run(["stop", name], allow_failure=True)
        self.run(["rm", name], allow_failure=True)
