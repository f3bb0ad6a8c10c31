"""Input path normalization.

Maps the path spellings users and environments hand us (including
Windows drive-letter paths on a POSIX host) to one form usable as a
traversal root.
"""

import re

# Drive mount prefix used by WSL and most container setups
DRIVE_MOUNT_PREFIX = "/mnt"

_DRIVE_PATTERN = re.compile(r"^([a-zA-Z]):(?:[\\/](.*))?$")
_ROOTS_DELIMITER = re.compile(r"[,;\n\r]+")


def normalize_input_path(raw: str, *, windows: bool = False) -> str:
    """Normalize a user-supplied path.

    On a POSIX host, ``C:\\Users\\me`` becomes ``/mnt/c/Users/me`` and a bare
    ``D:`` becomes ``/mnt/d``. On Windows the input is returned trimmed but
    otherwise unchanged. Applying the function twice gives the same result
    as applying it once.

    Args:
        raw: Path as typed or read from the environment.
        windows: True when running on a drive-letter platform.

    Returns:
        Normalized path, or an empty string for blank input.
    """
    trimmed = raw.strip()
    if not trimmed:
        return ""

    match = _DRIVE_PATTERN.match(trimmed)
    if match and not windows:
        drive = match.group(1).lower()
        rest = (match.group(2) or "").replace("\\", "/")
        rest = rest.removeprefix("/")
        if rest:
            return f"{DRIVE_MOUNT_PREFIX}/{drive}/{rest}"
        return f"{DRIVE_MOUNT_PREFIX}/{drive}"

    return trimmed


def split_roots_input(value: str | None) -> list[str]:
    """Split a delimited root list from the environment.

    Entries may be separated by commas, semicolons or newlines.

    Args:
        value: Raw environment value, possibly None.

    Returns:
        Trimmed, non-empty entries in their original order.
    """
    if not value:
        return []
    return [part.strip() for part in _ROOTS_DELIMITER.split(value) if part.strip()]
