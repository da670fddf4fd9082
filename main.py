# main.py

"""
Orchestrator: read CLI params, scan for mis-named media files, reconcile them, optionally write CSV.
"""
from __future__ import annotations
import argparse
import sys
from typing import List, Sequence

from extfix.config import DEFAULT_FORMATS, RunConfig
from extfix.errors import ReconcileError, SearchRootError
from extfix.model import Disposition, Outcome, ScanEntry
from extfix.reconcile import reconcile
from extfix.report import write_csv
from extfix.scanner import candidates, scan
from extfix.walk import validate_root

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_IO_ERROR = 3


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        description="Fix media file extensions that disagree with file content."
    )
    p.add_argument("search_root", type=str, help="Directory to scan (recursive).")
    p.add_argument(
        "--auto-execute",
        action="store_true",
        help="Rename and deduplicate files. Without it the run is a dry-run.",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Suppress per-file notices.")
    p.add_argument(
        "-f",
        "--formats",
        action="append",
        metavar="EXT",
        help=f"Detected extension eligible for fixing; repeatable (default: {' '.join(DEFAULT_FORMATS)}).",
    )
    p.add_argument("--report", type=str, help="Optional CSV report of the run.")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    """Fold parsed arguments into an immutable RunConfig."""
    return RunConfig.build(
        search_root=args.search_root,
        auto_execute=args.auto_execute,
        quiet=args.quiet,
        formats=args.formats,
        report_path=args.report,
    )


def _print_summary(
    config: RunConfig,
    entries: List[ScanEntry],
    outcomes: List[Outcome],
) -> None:
    """Print summary information to stdout."""
    skipped = sum(1 for e in entries if not e.ok)
    counts = {d: 0 for d in Disposition}
    for o in outcomes:
        counts[o.disposition] += 1
    print(
        f"[INFO] Done. Files: {len(entries)} | Skipped: {skipped} | "
        f"Renames: {counts[Disposition.RENAME]} | "
        f"Duplicates: {counts[Disposition.DEDUPLICATE]} | "
        f"Conflicts: {counts[Disposition.HASH_MISMATCH]} | "
        f"Same file: {counts[Disposition.SAME_FILE]}"
    )
    if config.report_path:
        print(f"[INFO] Report: {config.report_path.resolve()}")
    if config.auto_execute:
        print("[INFO] Auto-execute was enabled.")
    else:
        print("[INFO] Auto-execute was NOT enabled (dry-run mode).")


def main(argv: Sequence[str] | None = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    config = build_config(args)

    try:
        validate_root(config.search_root)
    except SearchRootError as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return EXIT_USAGE

    if not config.quiet:
        print(f"[INFO] Scanning: {config.search_root}")
    entries = scan(config.search_root, config.formats)

    try:
        outcomes = reconcile(candidates(entries), config)
    except ReconcileError as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return EXIT_IO_ERROR

    if config.report_path:
        try:
            write_csv(config.report_path, outcomes)
        except OSError as exc:
            print(f"[ERR] Failed to write report {config.report_path}: {exc}", file=sys.stderr)
            return EXIT_IO_ERROR

    if not config.quiet:
        _print_summary(config, entries, outcomes)
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
