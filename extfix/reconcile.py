# extfix/reconcile.py

"""
Reconciler: choose and (optionally) enact a Disposition for each Candidate.
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Callable, Iterable, List

from .config import RunConfig
from .digest import file_digest
from .errors import ReconcileError
from .model import Candidate, Disposition, Outcome


def _digest(path: Path) -> bytes:
    try:
        return file_digest(path)
    except OSError as exc:
        raise ReconcileError("digest", path, exc) from exc


def decide(candidate: Candidate) -> Disposition:
    """Pick a Disposition from the current filesystem state.

    Raises:
        ReconcileError: If either file cannot be inspected or hashed.
    """
    try:
        exists = candidate.corrected.exists()
    except OSError as exc:
        raise ReconcileError("stat", candidate.corrected, exc) from exc

    if not exists:
        return Disposition.RENAME
    try:
        # a symlink or a case-insensitive name pointing back at the original
        if os.path.samefile(candidate.original, candidate.corrected):
            return Disposition.SAME_FILE
    except OSError as exc:
        raise ReconcileError("stat", candidate.corrected, exc) from exc
    if _digest(candidate.original) == _digest(candidate.corrected):
        return Disposition.DEDUPLICATE
    return Disposition.HASH_MISMATCH


def enact(candidate: Candidate, disposition: Disposition, auto_execute: bool) -> bool:
    """Perform the side effect of a Disposition.

    Only the original path is ever renamed or removed. Nothing happens in
    dry-run, for a hash mismatch, or when both paths are the same file.

    Returns:
        bool: True if the filesystem was changed.

    Raises:
        ReconcileError: If the rename or delete fails.
    """
    if disposition in (Disposition.HASH_MISMATCH, Disposition.SAME_FILE):
        return False
    if not auto_execute:
        return False

    if disposition is Disposition.RENAME:
        try:
            candidate.original.rename(candidate.corrected)
        except OSError as exc:
            raise ReconcileError("rename", candidate.original, exc) from exc
        return True
    if disposition is Disposition.DEDUPLICATE:
        try:
            candidate.original.unlink()
        except OSError as exc:
            raise ReconcileError("delete", candidate.original, exc) from exc
        return True
    raise ValueError(f"Unhandled disposition: {disposition!r}")


def describe(candidate: Candidate, disposition: Disposition, auto_execute: bool) -> str:
    """Human-readable notice for a Disposition."""
    src, dst = candidate.original, candidate.corrected
    if disposition is Disposition.RENAME:
        if auto_execute:
            return f"[INFO] Renaming '{src}' to '{dst}'"
        return f"[DRY] Would rename '{src}' to '{dst}'"
    if disposition is Disposition.DEDUPLICATE:
        if auto_execute:
            return f"[INFO] Deduplicating '{src}' and '{dst}', removing '{src}'"
        return f"[DRY] Would deduplicate '{src}' and '{dst}', removing '{src}'"
    if disposition is Disposition.HASH_MISMATCH:
        return f"[WARN] Cannot deduplicate '{src}' and '{dst}', hash mismatch"
    if disposition is Disposition.SAME_FILE:
        return f"[WARN] Skipping '{src}', '{dst}' is the same file"
    raise ValueError(f"Unhandled disposition: {disposition!r}")


def reconcile(
    candidates: Iterable[Candidate],
    config: RunConfig,
    emit: Callable[[str], None] = print,
) -> List[Outcome]:
    """Process candidates one at a time, in order.

    Each candidate is decided, reported and (in auto-execute mode) enacted
    before the next one is looked at. The first ReconcileError aborts the
    batch; changes already made are kept.
    """
    outcomes: List[Outcome] = []
    for candidate in candidates:
        disposition = decide(candidate)
        if not config.quiet:
            emit(describe(candidate, disposition, config.auto_execute))
        performed = enact(candidate, disposition, config.auto_execute)
        outcomes.append(Outcome(candidate=candidate, disposition=disposition, performed=performed))
    return outcomes
