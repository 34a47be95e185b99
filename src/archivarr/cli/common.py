from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from archivarr.archive import COMPRESSED_SUFFIX
from archivarr.env import get_logs_dir


# ----------------------------
# Help dispatch (subparser-local)
# ----------------------------


def dispatch_subparser_help(
    parser: argparse.ArgumentParser, path: list[str] | None
) -> int:
    """
    Implements consistent `X help [subcmd ...]` behavior for a subtree parser.
    """
    if not path:
        parser.print_help()
        return 0

    try:
        parser.parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


def add_help_subcommand(
    sub: argparse._SubParsersAction, parent: argparse.ArgumentParser, name: str
) -> None:
    help_p = sub.add_parser("help", help=f"Show help for {name}")
    help_p.add_argument("path", nargs="*", help="Subcommand path")
    help_p.set_defaults(action="help", _help_parser=parent)


# ----------------------------
# Run-log filesystem helpers
# ----------------------------


def resolve_log_dir(*, command: str | None, explicit: str | None) -> Path:
    if explicit:
        return Path(explicit).expanduser().resolve()

    base = get_logs_dir()
    return base / command if command else base


def iter_log_files(log_dir: Path) -> list[Path]:
    if not log_dir.exists():
        return []
    return [p for p in log_dir.iterdir() if p.is_file() and p.suffix == ".log"]


def find_log_file(log_dir: Path, name: str) -> Path | None:
    if not log_dir.exists():
        return None

    for p in (log_dir / name, log_dir / f"{name}.log"):
        if p.is_file():
            return p

    for p in log_dir.glob("*.log"):
        if p.stem == name:
            return p

    return None


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def print_tail(path: Path, lines: int) -> None:
    try:
        data = read_text(path).splitlines()
    except OSError as e:
        print(f"[error reading log] {e}")
        return

    tail = data[-lines:] if lines > 0 else data
    for line in tail:
        print(line)


# ----------------------------
# Run status inference (log-driven)
# ----------------------------


def infer_run_status(path: Path) -> str:
    """
    Primary signal: the last RUN_STATUS=<value> line
      completed | failed | config_invalid

    Falls back to the "Done:" lines, then unknown.
    """
    try:
        text = read_text(path)
    except OSError:
        return "unknown"

    status = None
    for line in text.splitlines():
        idx = line.find("RUN_STATUS=")
        if idx != -1:
            status = line[idx + len("RUN_STATUS="):].split()[0]
    if status:
        return status

    if "Done: OK" in text:
        return "completed"
    if "Done: failed" in text:
        return "failed"

    return "unknown"


# ----------------------------
# Listing models
# ----------------------------


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: Path
    mtime: float
    size: int


def list_files(directory: Path, suffix: str) -> list[FileEntry]:
    """Regular files in directory ending with suffix, newest first."""
    if not directory.exists():
        return []

    items: list[FileEntry] = []
    for p in directory.iterdir():
        if not p.name.endswith(suffix):
            continue
        try:
            st = p.stat()
        except OSError:
            continue
        if not p.is_file():
            continue
        items.append(FileEntry(name=p.name, path=p, mtime=st.st_mtime, size=st.st_size))

    items.sort(key=lambda r: (r.mtime, r.name), reverse=True)
    return items


def list_run_files(log_dir: Path) -> list[FileEntry]:
    return list_files(log_dir, ".log")


def list_archive_files(archive_dir: Path) -> list[FileEntry]:
    return list_files(archive_dir, COMPRESSED_SUFFIX)


def format_mtime(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


# ----------------------------
# CLI output helpers
# ----------------------------


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """
    Simple fixed-width table printer for CLI output.
    """
    if not rows:
        print("(no results)")
        return

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    fmt = "  ".join(f"{{:{w}}}" for w in widths)

    print(fmt.format(*headers))
    print(fmt.format(*("-" * w for w in widths)))

    for row in rows:
        print(fmt.format(*(str(c) for c in row)))
