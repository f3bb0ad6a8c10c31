"""Discovery data structures."""

from dataclasses import dataclass

# A directory qualifies as a workspace when it holds <MARKER_CONTAINER>/<MARKER_DIR>
MARKER_CONTAINER = ".claude"
MARKER_DIR = "agents"


@dataclass(frozen=True, slots=True)
class TraversalItem:
    """A directory waiting on the crawl worklist.

    Attributes:
        directory: Absolute directory path.
        depth: Distance from the scan root that led here (root is 0).
    """

    directory: str
    depth: int


@dataclass(frozen=True, slots=True)
class ResolvedRoots:
    """Scan roots and depth budget for one crawl.

    Attributes:
        roots: Absolute, deduplicated root paths in resolution order.
        max_depth: Deepest level that is still read.
    """

    roots: tuple[str, ...]
    max_depth: int

    def __post_init__(self) -> None:
        """Validate the depth budget."""
        if self.max_depth < 0:
            msg = f"max_depth must be non-negative, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during one crawl.

    Attributes:
        directories_read: Directories whose entries were listed.
        unreadable: Directories that could not be listed.
        pruned: Directories dropped by prefix rules or the depth budget.
        missing_roots: Roots that did not exist.
    """

    directories_read: int = 0
    unreadable: int = 0
    pruned: int = 0
    missing_roots: int = 0
