# extfix/digest.py

from __future__ import annotations
import hashlib
from pathlib import Path

CHUNK_SIZE = 1024 * 1024


def file_digest(path: Path) -> bytes:
    """Return the SHA-256 digest of a file's full content."""
    hasher = hashlib.sha256()
    with path.open("rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.digest()
