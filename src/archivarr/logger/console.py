from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from archivarr.env import get_logging_env

# Console used by RichHandler. No explicit file: Rich resolves sys.stdout
# at write time, so redirected or captured stdout is honoured.
LOG_CONSOLE = Console(soft_wrap=True)


class QuietGateFilter(logging.Filter):
    """
    Drop console output when quiet mode is enabled.

    Records marked with extra={"passthrough": True} always pass.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "passthrough", False):
            return True
        return not get_logging_env().quiet


def build_console_handler(level: int = logging.NOTSET) -> logging.Handler:
    handler = RichHandler(
        console=LOG_CONSOLE,
        level=level,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )

    # RichHandler renders the level column; the formatter must not.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(QuietGateFilter())
    return handler


def log_passthrough(level: int, msg: str) -> None:
    logging.getLogger().log(level, msg, extra={"passthrough": True})
