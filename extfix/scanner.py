# extfix/scanner.py

"""
Scanner/classifier: find files whose extension disagrees with their content.
"""
from __future__ import annotations
from pathlib import Path
from typing import AbstractSet, Iterable, List

from .filetype import detect_filetype
from .model import Candidate, ScanEntry
from .walk import iter_entries


def current_extension(path: Path) -> str:
    """Return the substring after the last '.' of the file name, as stored.

    A name without a dot, or whose only dot is the leading one, has no extension.
    """
    stem, dot, ext = path.name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext


def with_extension(path: Path, ext: str) -> Path:
    """Replace the extension of a path, keeping its directory and stem."""
    name = path.name
    if current_extension(path) or (name.endswith(".") and name.rstrip(".")):
        name = name.rpartition(".")[0]
    return path.with_name(f"{name}.{ext}" if ext else name)


def classify(path: Path, formats: AbstractSet[str]) -> Candidate | None:
    """Build a Candidate for a file, or None if nothing needs fixing.

    Raises:
        OSError: If the file cannot be read.
    """
    det = detect_filetype(path)
    if det is None:
        return None

    current_ext = current_extension(path)
    if current_ext == det.ext or det.ext not in formats:
        return None

    return Candidate(
        original=path,
        corrected=with_extension(path, det.ext),
        current_ext=current_ext,
        detected_ext=det.ext,
        detected_mime=det.mime,
    )


def scan_entry(path: Path, formats: AbstractSet[str]) -> ScanEntry | None:
    """Classify one traversal entry. Returns None for entries that are not files.

    Names that cannot be encoded as UTF-8 are reported as errors and never
    reach reconciliation or reporting.
    """
    try:
        if not path.is_file():
            return None
        str(path).encode("utf-8")
        return ScanEntry(path=path, candidate=classify(path, formats))
    except UnicodeEncodeError as exc:
        return ScanEntry(path=path, error=f"{type(exc).__name__}: file name is not valid UTF-8")
    except OSError as exc:
        return ScanEntry(path=path, error=f"{type(exc).__name__}: {exc}")


def scan(root: Path, formats: AbstractSet[str]) -> List[ScanEntry]:
    """Scan a directory tree eagerly, one ScanEntry per regular file."""
    entries: List[ScanEntry] = []
    for path in iter_entries(root):
        entry = scan_entry(path, formats)
        if entry is not None:
            entries.append(entry)
    return entries


def candidates(entries: Iterable[ScanEntry]) -> List[Candidate]:
    """Candidates carried by successful entries, in scan order."""
    return [e.candidate for e in entries if e.ok and e.candidate is not None]
