# extfix/config.py

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable

DEFAULT_FORMATS = ("jpg", "png", "gif", "webp", "webm", "mp4", "avif", "mkv", "avi")


def normalize_formats(values: Iterable[str]) -> FrozenSet[str]:
    """Lowercase extensions, strip a leading dot and drop blanks."""
    normalized = set()
    for value in values:
        ext = value.strip().lower().lstrip(".")
        if ext:
            normalized.add(ext)
    return frozenset(normalized)


@dataclass(frozen=True)
class RunConfig:
    """Settings for one run, built once from the command line."""
    search_root: Path
    auto_execute: bool = False
    quiet: bool = False
    formats: FrozenSet[str] = frozenset(DEFAULT_FORMATS)
    report_path: Path | None = None

    @classmethod
    def build(
        cls,
        search_root: str | Path,
        auto_execute: bool = False,
        quiet: bool = False,
        formats: Iterable[str] | None = None,
        report_path: str | Path | None = None,
    ) -> "RunConfig":
        """Create a RunConfig, falling back to DEFAULT_FORMATS when none are given."""
        return cls(
            search_root=Path(search_root),
            auto_execute=bool(auto_execute),
            quiet=bool(quiet),
            formats=normalize_formats(formats if formats else DEFAULT_FORMATS),
            report_path=Path(report_path) if report_path else None,
        )
