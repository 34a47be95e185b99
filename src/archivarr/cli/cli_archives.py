from __future__ import annotations

import argparse
from pathlib import Path

from archivarr.cli.common import (
    add_help_subcommand,
    dispatch_subparser_help,
    format_mtime,
    list_archive_files,
    print_table,
)
from archivarr.env import ConfigError, get_env


def build_archives_parser(subparsers: argparse._SubParsersAction) -> None:
    archives = subparsers.add_parser("archives", help="Inspect the archive directory")
    asub = archives.add_subparsers(dest="archives_cmd", required=True)

    add_help_subcommand(asub, archives, "archives")

    list_p = asub.add_parser("list", help="List archived log files")
    list_p.add_argument("--dest", metavar="DIR", help="Archive directory")
    list_p.set_defaults(action="list")


def _resolve_archive_dir(explicit: str | None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    return get_env().archive_dir


def handle_archives(args: argparse.Namespace) -> int:
    if args.action == "help":
        return dispatch_subparser_help(
            args._help_parser, list(getattr(args, "path", []) or [])
        )

    if args.action == "list":
        try:
            archive_dir = _resolve_archive_dir(getattr(args, "dest", None))
        except ConfigError as e:
            print(f"Cannot resolve archive directory: {e}")
            return 2

        if not archive_dir.exists():
            print(f"No archive directory found: {archive_dir}")
            return 0

        rows = [
            [a.name, format_mtime(a.mtime), f"{a.size} bytes"]
            for a in list_archive_files(archive_dir)
        ]
        print_table(["archive", "time", "size"], rows)
        return 0

    raise SystemExit(f"Unknown archives action: {args.action}")
