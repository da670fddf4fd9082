# extfix/walk.py

from __future__ import annotations
import os
from pathlib import Path
from typing import Iterator

from .errors import SearchRootError


def validate_root(root: Path) -> None:
    """Check that a search root can be scanned.

    Args:
        root (Path): Directory to scan.

    Raises:
        SearchRootError: If the root is missing, not a directory, or unreadable.
    """
    if not root.exists():
        raise SearchRootError(root, "Search root not found")
    if not root.is_dir():
        raise SearchRootError(root, "Search root is not a directory")
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise SearchRootError(root, f"Search root is unreadable ({type(exc).__name__})") from exc


def iter_entries(root: Path) -> Iterator[Path]:
    """Iterate over every entry below a directory, recursively.

    Files and directories are yielded intermixed, in traversal order.
    Subdirectories that cannot be listed are skipped.

    Args:
        root (Path): Directory to scan.

    Yields:
        Path: Paths to each entry found.
    """
    yield from root.rglob("*")
