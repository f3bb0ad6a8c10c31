"""Bounded workspace crawler.

Walks directory trees from a set of roots looking for directories that
contain ``.claude/agents``. The walk is an explicit LIFO worklist rather
than recursion, visits each directory at most once, never follows symbolic
links, and never opens directories excluded by the skip rules.
"""

import logging
import os
import stat
from collections.abc import Iterable

from agentmounts.discovery.models import MARKER_CONTAINER, MARKER_DIR, CrawlStats, TraversalItem
from agentmounts.discovery.skip import SkipRules

logger = logging.getLogger(__name__)


class WorkspaceCrawler:
    """Discovers agent workspaces under a set of roots.

    A directory at depth ``max_depth`` is still read (so a marker directly
    inside it is found); its subdirectories are enqueued but dropped when
    popped. Listing failures are logged at debug level and the directory is
    treated as empty.

    Args:
        rules: Skip rules. Defaults to the built-in name and prefix lists.
    """

    def __init__(self, rules: SkipRules | None = None) -> None:
        self._rules = rules if rules is not None else SkipRules()
        self.stats = CrawlStats()

    def discover(self, roots: Iterable[str], max_depth: int) -> list[str]:
        """Walk the roots and return every workspace found.

        Args:
            roots: Absolute root directories.
            max_depth: Deepest level that is read (roots are level 0).

        Returns:
            Workspace paths without duplicates. The order reflects the walk
            and carries no meaning.
        """
        self.stats = CrawlStats()
        found: dict[str, None] = {}
        visited: set[str] = set()
        worklist: list[TraversalItem] = []

        for root in roots:
            if not os.path.exists(root):
                logger.warning("Skipping missing root %s", root)
                self.stats.missing_roots += 1
                continue
            worklist.append(TraversalItem(directory=os.path.abspath(root), depth=0))

        while worklist:
            item = worklist.pop()
            directory = os.path.abspath(item.directory)

            if directory in visited:
                continue
            visited.add(directory)

            if self._rules.matches_prefix(directory) or item.depth > max_depth:
                self.stats.pruned += 1
                continue

            for entry in self._read_entries(directory):
                if not _is_plain_directory(entry):
                    continue

                if entry.name == MARKER_CONTAINER:
                    # The marker container is a leaf whether or not it holds agents/
                    if self._has_marker(entry.path):
                        found.setdefault(directory, None)
                        logger.info(
                            "Found agents directory at %s",
                            os.path.join(entry.path, MARKER_DIR),
                        )
                    continue

                if self._rules.matches_name(entry.name):
                    continue

                worklist.append(TraversalItem(directory=entry.path, depth=item.depth + 1))

        return list(found)

    def _read_entries(self, directory: str) -> list[os.DirEntry[str]]:
        """List a directory's immediate children.

        Returns an empty list when the directory cannot be read.
        """
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot read %s: %s", directory, e)
            self.stats.unreadable += 1
            return []

        self.stats.directories_read += 1
        return entries

    @staticmethod
    def _has_marker(container: str) -> bool:
        """Check whether ``<container>/agents`` is a directory."""
        marker = os.path.join(container, MARKER_DIR)
        try:
            return stat.S_ISDIR(os.stat(marker).st_mode)
        except OSError as e:
            logger.debug("Failed to inspect potential agents directory %s: %s", marker, e)
            return False


def _is_plain_directory(entry: os.DirEntry[str]) -> bool:
    """True for real directories; symlinks and unreadable entries are excluded."""
    try:
        return not entry.is_symlink() and entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def discover_workspaces(
    roots: Iterable[str],
    max_depth: int,
    rules: SkipRules | None = None,
) -> list[str]:
    """Discover workspaces with a one-off crawler.

    Args:
        roots: Absolute root directories.
        max_depth: Deepest level that is read.
        rules: Optional skip rules.

    Returns:
        Workspace paths without duplicates.
    """
    return WorkspaceCrawler(rules).discover(roots, max_depth)
