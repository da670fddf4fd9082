# extfix/model.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class DetectionResult:
    """Represents the content type sniffed from a file's bytes."""
    ext: str   # canonical lowercase extension (no dot)
    mime: str  # content type


@dataclass(frozen=True)
class Candidate:
    """A file whose extension disagrees with its content.

    `corrected` always shares the parent directory and stem of `original`.
    """
    original: Path
    corrected: Path
    current_ext: str
    detected_ext: str
    detected_mime: str


class Disposition(Enum):
    """Reconciliation action chosen for a Candidate."""
    RENAME = "rename"
    DEDUPLICATE = "deduplicate"
    HASH_MISMATCH = "hash-mismatch"
    SAME_FILE = "same-file"


@dataclass(frozen=True)
class ScanEntry:
    """Result of scanning a single filesystem entry.

    Ok when `error` is None (with or without a candidate), Err otherwise.
    """
    path: Path
    candidate: Candidate | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Outcome:
    """Represents a reconciled candidate and whether its action was performed."""
    candidate: Candidate
    disposition: Disposition
    performed: bool
