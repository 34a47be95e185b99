from __future__ import annotations

from pathlib import Path

from archivarr.env import get_logs_dir


def command_logs_dir(command: str) -> Path:
    """
    Run-log directory for a CLI command (e.g. run, plan).
    """
    path = get_logs_dir() / command
    path.mkdir(parents=True, exist_ok=True)
    return path


def run_log_path(command: str, run_id: str) -> Path:
    return command_logs_dir(command) / f"{command}-{run_id}.log"
