# extfix/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import Outcome

HEADER = [
    "original", "corrected", "current_ext", "detected_ext",
    "detected_mime", "disposition", "performed",
]


def write_csv(out_path: Path, outcomes: Iterable[Outcome]) -> None:
    """Write reconciliation outcomes to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        outcomes (Iterable[Outcome]): Outcomes in processing order.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for o in outcomes:
            c = o.candidate
            writer.writerow([
                str(c.original),
                str(c.corrected),
                c.current_ext,
                c.detected_ext,
                c.detected_mime,
                o.disposition.value,
                str(o.performed).lower(),
            ])
