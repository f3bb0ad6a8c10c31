"""Subprocess helpers.

Every external command (in practice, docker) goes through run_command(),
which captures output as text and never invokes a shell.
"""

import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command.

    Attributes:
        stdout: Text written to standard output.
        stderr: Text written to standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return self.stdout + self.stderr


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run a command and capture its output.

    Args:
        args: Executable followed by its arguments.
        check: Raise CalledProcessError on a non-zero exit.
        timeout: Seconds to wait, None to wait indefinitely.
        cwd: Working directory, defaults to the current one.
        env: Extra environment variables layered over os.environ.

    Returns:
        CommandResult with the captured streams and exit status.

    Raises:
        subprocess.CalledProcessError: If check is set and the command fails.
        subprocess.TimeoutExpired: If the timeout elapses.
        FileNotFoundError: If the executable does not exist.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
        env={**os.environ, **env} if env else None,
    )
    return CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None
