"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from agentmounts.mounts.models import MountSpec
    from agentmounts.registry.models import WorkspaceEntry

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "section": "bold #69B9A1",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_mount_table(mounts: list[MountSpec], title: str = "Mount Plan") -> Table:
    """Build a table listing mounts in flag order.

    Args:
        mounts: Mounts to display.
        title: Table title.

    Returns:
        Rich Table with one row per mount.
    """
    table = Table(title=title, header_style="header", border_style="border")
    table.add_column("#", style="muted", justify="right", width=3)
    table.add_column("Host path", style="text")
    table.add_column("Container path", style="info")
    for i, mount in enumerate(mounts, start=1):
        table.add_row(str(i), escape(mount.source), escape(mount.dest))
    return table


def create_workspace_table(
    workspaces: list[WorkspaceEntry],
    title: str = "Registered Workspaces",
) -> Table:
    """Build a table listing registered workspaces.

    Args:
        workspaces: Registry entries to display.
        title: Table title.

    Returns:
        Rich Table with name, path and last-seen columns.
    """
    from datetime import UTC, datetime

    table = Table(title=title, header_style="header", border_style="border")
    table.add_column("Name", style="text", no_wrap=True)
    table.add_column("Path", style="info")
    table.add_column("Last seen", style="muted")
    for entry in workspaces:
        seen = datetime.fromtimestamp(entry.last_seen / 1000, tz=UTC)
        table.add_row(
            escape(entry.name),
            escape(entry.path),
            seen.strftime("%Y-%m-%d %H:%M UTC"),
        )
    return table


def print_section(message: str) -> None:
    """Print a section heading between orchestration steps."""
    console.print(f"\n[section]=== {escape(message)} ===[/]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")


def plural(count: int, word: str) -> str:
    """Format a count with a naively pluralized noun."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
