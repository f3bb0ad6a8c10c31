"""Sandbox orchestration.

Runs the wide discovery scan in a disposable container and starts the
workload container with the narrowed mount plan.
"""

from agentmounts.orchestration.docker import DockerCommandError, DockerRunner
from agentmounts.orchestration.setup import SetupOrchestrator, SetupResult

__all__ = [
    "DockerCommandError",
    "DockerRunner",
    "SetupOrchestrator",
    "SetupResult",
]
