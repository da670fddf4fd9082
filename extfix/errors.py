# extfix/errors.py

from __future__ import annotations
from pathlib import Path


class ExtfixError(Exception):
    """Base class for fatal errors that abort a run."""


class SearchRootError(ExtfixError):
    """The search root cannot be scanned."""

    def __init__(self, root: Path, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"{reason}: {root}")


class ReconcileError(ExtfixError):
    """An I/O failure while hashing, renaming or deleting a file."""

    def __init__(self, operation: str, path: Path, cause: OSError):
        self.operation = operation
        self.path = path
        self.cause = cause
        super().__init__(f"{operation} failed for '{path}': {type(cause).__name__}: {cause}")
