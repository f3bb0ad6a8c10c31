"""Setup command implementation.

Runs the two-phase sandbox setup: a wide scan in a disposable container,
then the workload container with mounts narrowed to what the scan found.
"""

import shlex
from typing import Annotated

import typer

from agentmounts.cli.types import get_settings
from agentmounts.mounts.planner import NoMountsAvailableError
from agentmounts.orchestration.docker import DockerCommandError, DockerRunner
from agentmounts.orchestration.setup import SetupOrchestrator
from agentmounts.utils.formatting import (
    console,
    create_mount_table,
    print_error,
    print_info,
    print_section,
    print_success,
    print_warning,
)
from agentmounts.utils.shell import command_exists


def _print_scan_output(output: str) -> None:
    console.print(output.rstrip(), markup=False, highlight=False)


def setup_sandbox(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Print the docker commands without running them.",
        ),
    ] = False,
) -> None:
    """Scan for workspaces and start the sandbox with narrow mounts.

    Examples:
        agentmounts setup              # Scan, then start the workload container
        agentmounts setup --dry-run    # Show the docker commands only
    """
    settings = get_settings(ctx)

    if not dry_run and not command_exists("docker"):
        print_error("docker is not installed or not in PATH.")
        raise typer.Exit(code=1)

    runner = DockerRunner(dry_run=dry_run)
    orchestrator = SetupOrchestrator(
        settings=settings,
        runner=runner,
        on_step=print_section,
        on_output=_print_scan_output,
    )

    try:
        result = orchestrator.run()
    except NoMountsAvailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except DockerCommandError as e:
        print_error(str(e))
        if e.result is not None and e.result.stdout.strip():
            _print_scan_output(e.result.stdout)
        raise typer.Exit(code=1) from e

    if dry_run:
        print_section("Commands")
        for command in runner.issued:
            console.print(shlex.join(command), markup=False, highlight=False)

    if result.fell_back:
        print_warning("Workload container uses the wide scan mounts.")
    for host_path in result.plan.missing:
        print_warning(f"Skipped missing host path {host_path}")

    console.print(create_mount_table(list(result.plan.mounts)))
    if dry_run:
        print_info("Dry run: no containers were started.")
    else:
        print_success(f"{settings.container} is running on port {settings.port}.")
