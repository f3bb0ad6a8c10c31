"""Plan command implementation.

Shows the mounts ``setup`` would give the workload container for a set
of discovered workspaces, without touching docker.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from agentmounts.cli.types import OutputFormat, get_settings
from agentmounts.mounts.planner import NoMountsAvailableError, build_mount_plan, require_scan_mounts
from agentmounts.registry.models import WorkspacesFile, parse_workspaces_file
from agentmounts.registry.store import RegistryError, WorkspaceRegistry
from agentmounts.utils.formatting import (
    console,
    create_mount_table,
    print_error,
    print_info,
    print_warning,
)


def _load_records(workspaces_file: Path | None) -> WorkspacesFile:
    """Read workspace records from a file or the local registry."""
    if workspaces_file is None:
        return WorkspaceRegistry().load()
    try:
        return parse_workspaces_file(workspaces_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise RegistryError(f"Failed to read {workspaces_file}: {e}") from e


def plan_mounts_command(
    ctx: typer.Context,
    workspaces_file: Annotated[
        Path | None,
        typer.Option(
            "--workspaces-file",
            "-w",
            help="Workspace records to plan for. Defaults to the local registry.",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the narrowed mount plan for discovered workspaces.

    Examples:
        agentmounts plan                              # Plan from the local registry
        agentmounts plan -w scan/workspaces.json      # Plan from a copied record file
        agentmounts plan --format json                # Output as JSON
    """
    settings = get_settings(ctx)

    try:
        wide_mounts = require_scan_mounts(settings)
    except NoMountsAvailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        records = _load_records(workspaces_file)
    except RegistryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    discovered = [entry.path for entry in records.workspaces]
    plan = build_mount_plan(discovered, wide_mounts)

    if output_format == OutputFormat.JSON:
        payload = {
            "wide_mounts": [mount.to_dict() for mount in wide_mounts],
            "discovered": discovered,
            "narrowed": plan.narrowed,
            "missing": list(plan.missing),
            "mounts": [mount.to_dict() for mount in plan.mounts],
        }
        console.print_json(json.dumps(payload))
        return

    if not plan.narrowed:
        print_warning("No usable workspaces discovered. Keeping wide mounts.")
    console.print(create_mount_table(list(plan.mounts)))
    print_info(f"{len(discovered)} discovered, {len(plan.mounts)} mounted")
