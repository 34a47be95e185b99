from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from archivarr.env import get_logging_env
from .console import build_console_handler, log_passthrough
from .file import build_file_handler, repoint_file_handler
from .log_paths import run_log_path
from .retention import enforce_retention
from . import state as _state

__all__ = [
    "get_logger",
    "init_logging",
    "current_log_file",
    "log_passthrough",
]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _ensure_run_id() -> str:
    run_id = os.environ.get("ARCHIVARR_RUN_ID")
    if not run_id:
        run_id = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        os.environ["ARCHIVARR_RUN_ID"] = run_id
    return run_id


def _target_path(command: str | None) -> Path:
    command = command or os.environ.get("ARCHIVARR_COMMAND") or "bootstrap"
    return run_log_path(command, _ensure_run_id())


def current_log_file() -> Path | None:
    return _state.LOG_FILE_PATH


def init_logging(command: str | None = None) -> Path:
    """
    Initialize logging for the entire process and return the run-log path.

    - Handlers are attached ONLY to the root logger.
    - Named loggers inherit via propagation.
    - Safe to call multiple times; file handler is repointed, not stacked.
    """
    env = get_logging_env()

    root = logging.getLogger()
    logfile = _target_path(command)

    log_dir = logfile.parent
    enforce_retention(log_dir, int(env.log_retention))

    # Base level from env, but verbose forces DEBUG everywhere.
    root_level = logging.DEBUG if env.verbose else _level_to_int(env.log_level)

    if _state.INITIALIZED and _state.LOG_FILE_PATH == logfile:
        root.setLevel(root_level)
        return logfile

    existing_file: logging.FileHandler | None = None
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            existing_file = h
            break

    root.handlers.clear()
    root.setLevel(root_level)

    if existing_file is not None:
        repoint_file_handler(existing_file, logfile)
        root.addHandler(existing_file)
    else:
        root.addHandler(build_file_handler(logfile))

    root.addHandler(build_console_handler(root_level))

    _state.INITIALIZED = True
    _state.RUN_ID = os.environ.get("ARCHIVARR_RUN_ID")
    _state.LOG_DIR = log_dir
    _state.LOG_FILE_PATH = logfile
    return logfile
