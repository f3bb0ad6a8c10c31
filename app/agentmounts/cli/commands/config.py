"""Settings commands.

Shows the effective settings and writes them to the config file.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from agentmounts.cli.types import OutputFormat, get_settings
from agentmounts.core.paths import get_config_path
from agentmounts.core.settings import (
    PERSISTED_FIELDS,
    Settings,
    SettingsError,
    load_settings,
    save_settings,
)
from agentmounts.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show and initialize settings.",
    no_args_is_help=True,
)


def _format_value(value: object) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if value is None or value == "":
        return "-"
    return str(value)


@app.command()
def show(
    ctx: typer.Context,
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
    """Show the effective settings."""
    settings = get_settings(ctx)
    data = settings.model_dump()

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(data))
        return

    table = Table(title="Settings", header_style="header", border_style="border")
    table.add_column("Setting", style="text", no_wrap=True)
    table.add_column("Value", style="info")
    for key, value in data.items():
        table.add_row(key, escape(_format_value(value)))
    table.add_row("scan_container", escape(settings.scan_container))
    console.print(table)

    config_path = get_config_path()
    status = "" if config_path.exists() else " (not created)"
    console.print(f"\n[muted]Config file: {escape(str(config_path))}{status}[/]")


def _settings_for_overwrite() -> Settings:
    try:
        return load_settings()
    except SettingsError as e:
        print_warning(f"Replacing invalid config file: {e}")
    return load_settings(read_file=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the effective settings to the config file.

    With --force an unreadable existing file is replaced by the settings
    taken from the environment and the defaults.
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config file already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        settings = _settings_for_overwrite() if force else get_settings(ctx)
        saved = save_settings(settings, config_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote {len(PERSISTED_FIELDS)} settings to {saved}")
