from __future__ import annotations

import argparse

from archivarr.branding import ARCHIVARR_BANNER
from archivarr.logger import get_logger


def _add_selection_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--source", metavar="DIR", help="Log directory to scan")
    p.add_argument(
        "--dest", metavar="DIR", help="Archive directory (default: <source>/archive)"
    )
    p.add_argument(
        "--days",
        type=float,
        metavar="N",
        help="Archive files older than N days (default: 7)",
    )
    p.add_argument(
        "--suffix",
        help="Only consider files ending with this suffix (default: .log, '' for all)",
    )
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--quiet", action="store_true")


def build_run_parser(subparsers: argparse._SubParsersAction) -> None:
    run = subparsers.add_parser("run", help="Compress and archive aged log files")
    _add_selection_args(run)
    run.add_argument(
        "--no-clobber",
        action="store_true",
        help="Fail instead of overwriting an existing archive of the same name",
    )
    run.add_argument(
        "--level",
        type=int,
        choices=range(1, 10),
        metavar="1-9",
        help="gzip compression level (default: 9)",
    )
    run.add_argument(
        "--dry-run", action="store_true", help="Only report what would be archived"
    )


def build_plan_parser(subparsers: argparse._SubParsersAction) -> None:
    plan = subparsers.add_parser(
        "plan", help="List the log files a run would archive, changing nothing"
    )
    _add_selection_args(plan)


def handle_run(args: argparse.Namespace) -> int:
    from archivarr.runner import run_once

    log = get_logger("archivarr")
    log.debug(ARCHIVARR_BANNER)

    dry_run = args.command == "plan" or bool(getattr(args, "dry_run", False))
    outcome = run_once(dry_run=dry_run)
    return outcome.exit_code
