from __future__ import annotations

import argparse
import sys

from archivarr.bootstrap import bootstrap_base_env, bootstrap_run_context

# Commands that run the archiver and therefore own a run log.
_RUN_COMMANDS = ("run", "plan")


def _dispatch_help(argv: list[str]) -> int:
    # Support:
    #   archivarr help
    #   archivarr help run
    #   archivarr runs help
    if argv and argv[0] == "help":
        argv = argv[1:]
    argv = [a for a in argv if a != "help"]

    try:
        build_parser().parse_args(argv + ["--help"])
    except SystemExit:
        pass
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="archivarr",
        description="Compress aged log files and move them into an archive directory.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    help_cmd = sub.add_parser("help", help="Show help")
    help_cmd.add_argument("path", nargs="*", help="Command path to show help for")
    help_cmd.set_defaults(_help=True)

    # Keep imports inside builder to avoid early side effects.
    from archivarr.cli.cli_run import build_plan_parser, build_run_parser
    from archivarr.cli.cli_archives import build_archives_parser
    from archivarr.cli.cli_runs import build_runs_parser
    from archivarr.cli.cli_logs import build_logs_parser
    from archivarr.cli.cli_env import build_env_parser

    build_run_parser(sub)
    build_plan_parser(sub)
    build_archives_parser(sub)
    build_runs_parser(sub)
    build_logs_parser(sub)
    build_env_parser(sub)

    return p


def _flag(args: argparse.Namespace, name: str) -> bool | None:
    # Unset store_true flags must not override values from .env
    return True if getattr(args, name, False) else None


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # Load .env and base environment early
    bootstrap_base_env()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Unified help routing
    if getattr(args, "_help", False):
        return _dispatch_help(argv)

    # Stamp run context early
    bootstrap_run_context(
        command=args.command,
        source_dir=getattr(args, "source", None),
        archive_dir=getattr(args, "dest", None),
        retention_days=getattr(args, "days", None),
        suffix=getattr(args, "suffix", None),
        overwrite=False if getattr(args, "no_clobber", False) else None,
        compress_level=getattr(args, "level", None),
        dry_run=_flag(args, "dry_run"),
        verbose=_flag(args, "verbose"),
        quiet=_flag(args, "quiet"),
    )

    # Dispatch
    if args.command in _RUN_COMMANDS:
        # Initialize logging AFTER run-context env stamping
        from archivarr.logger import init_logging, get_logger
        from archivarr.cli.cli_run import handle_run

        logfile = init_logging(args.command)
        log = get_logger(__name__)
        log.debug("Archivarr starting")
        log.debug(f"Command: {args.command}")
        log.debug(f"Run log: {logfile}")

        return handle_run(args)

    if args.command == "archives":
        from archivarr.cli.cli_archives import handle_archives

        return handle_archives(args)

    if args.command == "runs":
        from archivarr.cli.cli_runs import handle_runs

        return handle_runs(args)

    if args.command == "logs":
        from archivarr.cli.cli_logs import handle_logs

        return handle_logs(args)

    if args.command == "env":
        from archivarr.cli.cli_env import handle_env

        return handle_env(args)

    raise RuntimeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
