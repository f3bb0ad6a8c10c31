"""agentmounts - discover agent workspaces and narrow sandbox mounts."""

__version__ = "0.1.0"
