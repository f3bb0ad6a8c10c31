"""Scan command implementation.

Crawls the scan roots for ``.claude/agents`` workspaces and records them
in the workspace registry.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from agentmounts.cli.types import OutputFormat, get_settings
from agentmounts.discovery.crawler import WorkspaceCrawler
from agentmounts.discovery.roots import resolve_roots
from agentmounts.discovery.skip import SkipRules
from agentmounts.registry.store import RegistryError, WorkspaceRegistry
from agentmounts.utils.formatting import (
    console,
    plural,
    print_error,
    print_info,
    print_section,
    print_success,
    print_warning,
)


def scan_workspaces(
    ctx: typer.Context,
    roots: Annotated[
        list[str] | None,
        typer.Argument(
            help="Directories to scan. Defaults to AGENT_SCAN_ROOTS or platform defaults.",
            show_default=False,
        ),
    ] = None,
    max_depth: Annotated[
        str | None,
        typer.Option(
            "--max-depth",
            "--maxDepth",
            "-d",
            help="Deepest directory level to read (roots are level 0).",
            show_default=False,
        ),
    ] = None,
    register: Annotated[
        bool,
        typer.Option(
            "--register/--no-register",
            help="Record discovered workspaces in the registry.",
        ),
    ] = True,
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
    """Find directories containing .claude/agents.

    Examples:
        agentmounts scan                       # Scan the default roots
        agentmounts scan ~/code /mnt/c/src     # Scan specific roots
        agentmounts scan --max-depth 3         # Limit traversal depth
        agentmounts scan --no-register         # Report only
        agentmounts scan --format json         # Output as JSON
    """
    settings = get_settings(ctx)
    resolved = resolve_roots(roots or [], settings, cli_max_depth=max_depth)
    as_json = output_format == OutputFormat.JSON

    if not as_json:
        print_section(
            f"Scanning {plural(len(resolved.roots), 'root')} up to depth {resolved.max_depth}"
        )
        for root in resolved.roots:
            console.print(f"  [muted]{escape(root)}[/]")

    crawler = WorkspaceCrawler(SkipRules.from_settings(settings))
    found = crawler.discover(resolved.roots, resolved.max_depth)

    registered_total: int | None = None
    result = None
    if found and register:
        registry = WorkspaceRegistry()
        try:
            result = registry.register_workspaces_bulk(found)
            registered_total = len(registry.get_workspaces())
        except RegistryError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    if as_json:
        payload: dict[str, object] = {
            "roots": list(resolved.roots),
            "max_depth": resolved.max_depth,
            "workspaces": found,
        }
        if result is not None:
            payload["registered"] = {
                "added": result.added,
                "updated": result.updated,
                "skipped": result.skipped,
                "total": registered_total,
            }
        console.print_json(json.dumps(payload))
        return

    unreadable = crawler.stats.unreadable
    if unreadable:
        noun = "directory" if unreadable == 1 else "directories"
        print_warning(f"Skipped {unreadable} unreadable {noun} (use --verbose for details).")

    if not found:
        print_info("No .claude/agents directories found.")
        return

    print_section(f"Discovered {plural(len(found), 'workspace')}")
    for path in found:
        console.print(f"  {escape(path)}")

    if result is not None:
        print_success(
            f"Registered {plural(result.added, 'new workspace')} "
            f"(updated {result.updated}, skipped {result.skipped})."
        )
        print_info(f"Total registered workspaces: {registered_total}")
