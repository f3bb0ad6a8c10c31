"""Allow ``python -m agentmounts``."""

from agentmounts.cli.main import app

app()
