"""Workspace registry storage.

Keeps the set of discovered workspaces in a JSON file under the state
directory. Scans merge into it with register_workspaces_bulk(); the setup
command reads it back to build the narrow mount plan.
"""

import logging
import os
import time
from pathlib import Path

from agentmounts.core.paths import ensure_state_dir, get_state_dir, get_workspaces_path
from agentmounts.discovery.models import MARKER_CONTAINER, MARKER_DIR
from agentmounts.registry.models import (
    RegistrationResult,
    WorkspaceEntry,
    WorkspacesFile,
    parse_workspaces_file,
)

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when the registry file cannot be read or written."""


def _now_ms() -> int:
    return int(time.time() * 1000)


def _workspace_name(path: str) -> str:
    return os.path.basename(path.rstrip("/\\")) or path


class WorkspaceRegistry:
    """Manages the workspace registry file.

    Storage location: ~/.local/state/agentmounts/workspaces.json

    Attributes:
        path: Location of the registry file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize WorkspaceRegistry.

        Args:
            path: Optional override for the registry file.
                  Default: ~/.local/state/agentmounts/workspaces.json
        """
        self._path = path if path is not None else get_workspaces_path()

    @property
    def path(self) -> Path:
        """Path to the registry file."""
        return self._path

    def load(self) -> WorkspacesFile:
        """Read the registry; a missing or malformed file reads as empty.

        Raises:
            RegistryError: If the file exists but cannot be read.
        """
        if not self._path.exists():
            return WorkspacesFile()
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise RegistryError(f"Failed to read registry {self._path}: {e}") from e
        return parse_workspaces_file(raw)

    def get_workspaces(self) -> list[WorkspaceEntry]:
        """Return all registered workspaces in registration order."""
        return list(self.load().workspaces)

    def register_workspaces_bulk(
        self,
        paths: list[str],
        *,
        now_ms: int | None = None,
    ) -> RegistrationResult:
        """Merge discovered workspace paths into the registry.

        New paths are appended, known paths get a fresh lastSeen, and
        paths that are empty, repeated in the input, or no longer contain
        ``.claude/agents`` are skipped.

        Args:
            paths: Absolute workspace paths from a crawl.
            now_ms: Timestamp to record. Defaults to the current time.

        Returns:
            Counts of added, updated and skipped paths.

        Raises:
            RegistryError: If the registry cannot be read or written.
        """
        timestamp = now_ms if now_ms is not None else _now_ms()
        data = self.load()
        index = {entry.path: i for i, entry in enumerate(data.workspaces)}

        added = updated = skipped = 0
        seen: set[str] = set()
        for path in paths:
            if not path or path in seen:
                skipped += 1
                continue
            seen.add(path)

            if not os.path.isdir(os.path.join(path, MARKER_CONTAINER, MARKER_DIR)):
                logger.debug("Not registering %s: no %s/%s", path, MARKER_CONTAINER, MARKER_DIR)
                skipped += 1
                continue

            if path in index:
                data.workspaces[index[path]].last_seen = timestamp
                updated += 1
            else:
                data.workspaces.append(
                    WorkspaceEntry(path=path, name=_workspace_name(path), last_seen=timestamp)
                )
                index[path] = len(data.workspaces) - 1
                added += 1

        if added or updated:
            self._save(data)

        return RegistrationResult(added=added, updated=updated, skipped=skipped)

    def remove_workspace(self, path: str) -> bool:
        """Forget a registered workspace.

        Args:
            path: Registered workspace path.

        Returns:
            True if the path was registered and has been removed.

        Raises:
            RegistryError: If the registry cannot be read or written.
        """
        data = self.load()
        remaining = [entry for entry in data.workspaces if entry.path != path]
        if len(remaining) == len(data.workspaces):
            return False
        data.workspaces = remaining
        self._save(data)
        return True

    def _save(self, data: WorkspacesFile) -> None:
        """Write the registry atomically via a temporary file."""
        from tempfile import NamedTemporaryFile

        tmp_path: Path | None = None
        try:
            if self._path.parent == get_state_dir():
                ensure_state_dir()
            else:
                self._path.parent.mkdir(parents=True, exist_ok=True)

            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(data.to_json() + "\n")
            os.replace(str(tmp_path), str(self._path))
        except (OSError, RuntimeError) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise RegistryError(f"Failed to write registry {self._path}: {e}") from e
