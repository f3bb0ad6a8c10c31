"""Workspace discovery.

This module provides input path normalization, scan root resolution,
skip rules and the bounded crawler that finds ``.claude/agents``
workspaces.
"""

from agentmounts.discovery.crawler import WorkspaceCrawler, discover_workspaces
from agentmounts.discovery.models import (
    MARKER_CONTAINER,
    MARKER_DIR,
    CrawlStats,
    ResolvedRoots,
    TraversalItem,
)
from agentmounts.discovery.normalize import normalize_input_path, split_roots_input
from agentmounts.discovery.roots import (
    get_default_roots,
    parse_max_depth,
    resolve_roots,
)
from agentmounts.discovery.skip import DEFAULT_SKIP_DIR_NAMES, DEFAULT_SKIP_PREFIXES, SkipRules

__all__ = [
    "DEFAULT_SKIP_DIR_NAMES",
    "DEFAULT_SKIP_PREFIXES",
    "MARKER_CONTAINER",
    "MARKER_DIR",
    "CrawlStats",
    "ResolvedRoots",
    "SkipRules",
    "TraversalItem",
    "WorkspaceCrawler",
    "discover_workspaces",
    "get_default_roots",
    "normalize_input_path",
    "parse_max_depth",
    "resolve_roots",
    "split_roots_input",
]
