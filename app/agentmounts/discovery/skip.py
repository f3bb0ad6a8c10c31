"""Skip rules for workspace discovery.

Name rules prune well-known directories (VCS metadata, dependency caches,
OS volumes) before they are enqueued. Prefix rules keep pseudo-filesystems
and container runtime state from ever being opened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentmounts.core.settings import Settings

# Matched case-insensitively against the last path segment
DEFAULT_SKIP_DIR_NAMES: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".hg",
    ".svn",
    ".cache",
    ".ccflare",
    ".config",
    ".vscode",
    ".idea",
    ".Trash",
    "__pycache__",
    "venv",
    ".venv",
    "Library",
    "System Volume Information",
    "$Recycle.Bin",
    "ProgramData",
    "Program Files",
    "Program Files (x86)",
)

# Matched against the full absolute path
DEFAULT_SKIP_PREFIXES: tuple[str, ...] = (
    "/proc",
    "/sys",
    "/dev",
    "/run",
    "/var/lib/docker",
    "/var/lib/containerd",
    "/var/lib/snapd",
    "/var/log",
)


@dataclass(frozen=True, slots=True)
class SkipRules:
    """Directory names and absolute prefixes excluded from traversal.

    Attributes:
        names: Lower-cased directory names.
        prefixes: Absolute path prefixes without trailing separators.
    """

    names: frozenset[str] = frozenset(name.lower() for name in DEFAULT_SKIP_DIR_NAMES)
    prefixes: tuple[str, ...] = DEFAULT_SKIP_PREFIXES

    @classmethod
    def build(
        cls,
        names: list[str] | tuple[str, ...],
        prefixes: list[str] | tuple[str, ...],
    ) -> SkipRules:
        """Create rules, normalizing case and trailing separators."""
        return cls(
            names=frozenset(name.lower() for name in names),
            prefixes=tuple(p.rstrip("/") for p in prefixes if p.rstrip("/")),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SkipRules:
        """Create rules from the configured skip lists."""
        return cls.build(settings.skip_dir_names, settings.skip_prefixes)

    def matches_name(self, name: str) -> bool:
        """Check a directory name against the name rules."""
        return name.lower() in self.names

    def matches_prefix(self, path: str) -> bool:
        """Check an absolute path against the prefix rules.

        The filesystem root never matches, so scanning "/" still descends
        into its non-excluded children.
        """
        if path == "/":
            return False
        return any(path == prefix or path.startswith(f"{prefix}/") for prefix in self.prefixes)
