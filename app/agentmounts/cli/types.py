"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from agentmounts.core.settings import Settings, SettingsError, load_settings
from agentmounts.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_settings(ctx: typer.Context) -> Settings:
    """Load Settings on first use and cache them on the root context.

    Args:
        ctx: Current Typer context.

    Returns:
        Effective Settings.

    Raises:
        typer.Exit: With code 1 if the settings cannot be loaded.
    """
    obj = ctx.find_root().ensure_object(dict)
    settings = obj.get("settings")
    if settings is None:
        try:
            settings = load_settings()
        except SettingsError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        obj["settings"] = settings
    return settings
