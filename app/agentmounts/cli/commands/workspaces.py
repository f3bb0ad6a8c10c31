"""Workspace registry commands.

Lists and forgets workspaces recorded by ``agentmounts scan``.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from agentmounts.cli.types import OutputFormat
from agentmounts.registry.store import RegistryError, WorkspaceRegistry
from agentmounts.utils.formatting import (
    console,
    create_workspace_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Inspect the workspace registry.",
    no_args_is_help=True,
)


@app.command("list")
def list_workspaces(
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
    """List registered workspaces."""
    registry = WorkspaceRegistry()
    try:
        workspaces = registry.get_workspaces()
    except RegistryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        data = [entry.model_dump(by_alias=True) for entry in workspaces]
        console.print_json(json.dumps(data))
        return

    if not workspaces:
        print_info("No workspaces registered. Run 'agentmounts scan' first.")
        return

    console.print(create_workspace_table(workspaces))
    console.print(f"\n[muted]Registry: {escape(str(registry.path))}[/]")


@app.command()
def forget(
    path: Annotated[str, typer.Argument(help="Registered workspace path.")],
) -> None:
    """Remove a workspace from the registry."""
    try:
        removed = WorkspaceRegistry().remove_workspace(path)
    except RegistryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not removed:
        print_error(f"Workspace not registered: {path}")
        raise typer.Exit(code=1)

    print_success(f"Forgot {path}")
