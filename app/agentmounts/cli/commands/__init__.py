"""CLI commands for agentmounts.

This package contains all subcommand implementations.
"""

from agentmounts.cli.commands import config, plan, scan, setup, workspaces

__all__ = ["config", "plan", "scan", "setup", "workspaces"]
