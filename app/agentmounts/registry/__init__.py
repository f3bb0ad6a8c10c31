"""Workspace registry.

Persists discovered workspaces to workspaces.json and reports how a
bulk registration changed it.
"""

from agentmounts.registry.models import (
    REGISTRY_VERSION,
    RegistrationResult,
    WorkspaceEntry,
    WorkspacesFile,
    parse_workspaces_file,
)
from agentmounts.registry.store import RegistryError, WorkspaceRegistry

__all__ = [
    "REGISTRY_VERSION",
    "RegistrationResult",
    "RegistryError",
    "WorkspaceEntry",
    "WorkspaceRegistry",
    "WorkspacesFile",
    "parse_workspaces_file",
]
