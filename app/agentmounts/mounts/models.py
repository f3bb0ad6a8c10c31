"""Mount specification model."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MountSpec:
    """A bind mount from the host into a container.

    Attributes:
        source: Absolute host path.
        dest: Absolute path inside the container.
    """

    source: str
    dest: str

    def __post_init__(self) -> None:
        """Validate mount paths after initialization."""
        if not self.source or not self.dest:
            msg = "Mount source and destination cannot be empty"
            raise ValueError(msg)

    def as_volume_arg(self) -> str:
        """Format as the value of a docker ``-v`` flag."""
        return f"{self.source}:{self.dest}"

    def to_dict(self) -> dict[str, str]:
        """Serialize to dictionary for JSON output."""
        return {"source": self.source, "dest": self.dest}
