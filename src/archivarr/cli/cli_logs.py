from __future__ import annotations

import argparse

from archivarr.cli.common import (
    add_help_subcommand,
    dispatch_subparser_help,
    find_log_file,
    iter_log_files,
    print_tail,
    resolve_log_dir,
)


def build_logs_parser(subparsers: argparse._SubParsersAction) -> None:
    logs = subparsers.add_parser("logs", help="Run-log utilities")
    lsub = logs.add_subparsers(dest="logs_cmd", required=True)

    add_help_subcommand(lsub, logs, "logs")

    list_p = lsub.add_parser("list", help="List run-log files")
    list_p.add_argument(
        "--for", dest="for_command", default="run", help="Command whose logs to list"
    )
    list_p.add_argument("--dir", help="Explicit log directory")
    list_p.set_defaults(action="list")

    show_p = lsub.add_parser("show", help="Show a run-log file (tail)")
    show_p.add_argument("name", help="Log filename or stem")
    show_p.add_argument(
        "--for", dest="for_command", default="run", help="Command whose logs to search"
    )
    show_p.add_argument("--dir", help="Explicit log directory")
    show_p.add_argument("--tail", type=int, default=120, help="Lines from end")
    show_p.set_defaults(action="show")


def handle_logs(args: argparse.Namespace) -> int:
    if args.action == "help":
        return dispatch_subparser_help(
            args._help_parser, list(getattr(args, "path", []) or [])
        )

    log_dir = resolve_log_dir(
        command=getattr(args, "for_command", None), explicit=getattr(args, "dir", None)
    )

    if args.action == "list":
        if not log_dir.exists():
            print("No logs directory found")
            return 0
        for p in sorted(iter_log_files(log_dir)):
            print(p.name)
        return 0

    if args.action == "show":
        path = find_log_file(log_dir, args.name)
        if not path:
            print(f"Log not found: {args.name}")
            return 1
        print_tail(path, int(args.tail))
        return 0

    raise SystemExit(f"Unknown logs action: {args.action}")
