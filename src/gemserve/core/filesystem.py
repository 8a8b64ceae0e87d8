"""Filesystem probing with explicit outcomes.

Every call returns one of three results instead of raising, so callers
branch on types rather than on exception classes or errno values.
"""

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO


@dataclass(frozen=True)
class Found:
    """Entry exists."""

    is_dir: bool


@dataclass(frozen=True)
class Missing:
    """Entry does not exist."""


@dataclass(frozen=True)
class ProbeError:
    """Entry could not be inspected for a reason other than absence."""

    detail: str


ProbeResult = Found | Missing | ProbeError

# A file used as a directory component means the requested entry is absent
_MISSING_ERRORS = (FileNotFoundError, NotADirectoryError)


def probe(path: Path) -> ProbeResult:
    """Stat a path, following symlinks.

    Args:
        path: Filesystem path to inspect

    Returns:
        Found, Missing, or ProbeError with the underlying error text
    """
    try:
        st = os.stat(path)
    except _MISSING_ERRORS:
        return Missing()
    except (OSError, ValueError) as e:
        return ProbeError(f"stat {path}: {e}")
    return Found(is_dir=stat.S_ISDIR(st.st_mode))


def open_file(path: Path) -> BinaryIO | Missing | ProbeError:
    """Open a file for binary reading.

    Args:
        path: File to open

    Returns:
        Open binary stream (owned by the caller), Missing, or ProbeError
    """
    try:
        return path.open("rb")
    except _MISSING_ERRORS:
        return Missing()
    except (OSError, ValueError) as e:
        return ProbeError(f"open {path}: {e}")
