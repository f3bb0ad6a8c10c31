"""Workspace registry record models.

The registry file is shared with the scan container and read back by the
setup command, so its JSON layout is fixed:

    {"version": 1, "workspaces": [{"path": ..., "name": ..., "lastSeen": ...}]}
"""

import json
import logging
from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

REGISTRY_VERSION = 1


class WorkspaceEntry(BaseModel):
    """A registered workspace.

    Attributes:
        path: Absolute workspace directory (the parent of .claude/).
        name: Display name, the directory's base name.
        last_seen: Last time a scan found it, in epoch milliseconds.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    path: Annotated[str, Field(min_length=1, description="Absolute workspace path")]
    name: Annotated[str, Field(description="Display name")]
    last_seen: Annotated[
        int,
        Field(alias="lastSeen", ge=0, description="Epoch milliseconds of last discovery"),
    ]


class WorkspacesFile(BaseModel):
    """Top-level registry document."""

    model_config = ConfigDict(extra="ignore")

    version: int = REGISTRY_VERSION
    workspaces: list[WorkspaceEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize using the on-disk field names."""
        return json.dumps(self.model_dump(by_alias=True), indent=2)


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    """Outcome of a bulk registration.

    Attributes:
        added: Paths registered for the first time.
        updated: Already registered paths whose lastSeen was refreshed.
        skipped: Paths rejected (empty, duplicate in input, or no marker).
    """

    added: int = 0
    updated: int = 0
    skipped: int = 0


def parse_workspaces_file(raw: str) -> WorkspacesFile:
    """Parse registry JSON, treating anything unusable as empty.

    Args:
        raw: File contents, possibly empty.

    Returns:
        Parsed WorkspacesFile, or an empty one if the text is blank,
        not JSON, or does not match the schema.
    """
    if not raw or not raw.strip():
        return WorkspacesFile()

    try:
        return WorkspacesFile.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Failed to parse workspaces file: %s", e)
        return WorkspacesFile()
