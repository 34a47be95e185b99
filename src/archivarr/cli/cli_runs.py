from __future__ import annotations

import argparse

from archivarr.cli.common import (
    add_help_subcommand,
    dispatch_subparser_help,
    format_mtime,
    infer_run_status,
    list_run_files,
    print_table,
    print_tail,
    resolve_log_dir,
)


# ============================================================================
# CLI wiring
# ============================================================================


def _add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--for", dest="for_command", default="run", help="Command whose runs to inspect"
    )
    p.add_argument("--dir", help="Explicit log directory")


def build_runs_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("runs", help="Inspect past runs (log-driven)")
    sp = p.add_subparsers(dest="runs_cmd", required=True)

    add_help_subcommand(sp, p, "runs")

    list_p = sp.add_parser("list", help="List runs")
    _add_location_args(list_p)
    list_p.set_defaults(action="list")

    latest_p = sp.add_parser("latest", help="Show latest run")
    _add_location_args(latest_p)
    latest_p.set_defaults(action="latest")

    show_p = sp.add_parser("show", help="Show a specific run")
    show_p.add_argument("run_id", help="Run id (timestamp) or filename stem")
    _add_location_args(show_p)
    show_p.add_argument("--tail", type=int, default=40, help="Lines to show from end")
    show_p.set_defaults(action="show")


def handle_runs(args: argparse.Namespace) -> int:
    if args.action == "help":
        return dispatch_subparser_help(
            args._help_parser, list(getattr(args, "path", []) or [])
        )

    log_dir = resolve_log_dir(command=args.for_command, explicit=args.dir)
    runs = list_run_files(log_dir)

    if args.action == "list":
        rows = [
            [r.path.stem, infer_run_status(r.path), format_mtime(r.mtime), f"{r.size} bytes"]
            for r in runs
        ]
        print_table(["run_id", "state", "time", "size"], rows)
        return 0

    if args.action == "latest":
        if not runs:
            print("No runs found")
            return 1

        r = runs[0]
        print(f"{r.path.stem}  {infer_run_status(r.path)}  {format_mtime(r.mtime)}  {r.path}")
        return 0

    if args.action == "show":
        name = args.run_id
        match = next((r for r in runs if name in (r.path.stem, r.name)), None)
        if match is None:
            # run ids are stamped into file names as <command>-<run_id>
            match = next((r for r in runs if r.path.stem.endswith(f"-{name}")), None)

        if match is None:
            print(f"Run not found: {name}")
            return 1

        print(f"Run:   {match.path.stem}")
        print(f"Path:  {match.path}")
        print(f"Time:  {format_mtime(match.mtime)}")
        print(f"Size:  {match.size} bytes")
        print(f"State: {infer_run_status(match.path)}")
        print()

        print_tail(match.path, args.tail)
        return 0

    raise SystemExit(f"Unknown runs action: {args.action}")
