"""Command-line interface for agentmounts."""

from agentmounts.cli.main import app

__all__ = ["app"]
