"""bootstrap.py

Process bootstrap for Archivarr.

This module is intentionally tiny and side-effectful.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() exactly once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else treats environment variables as the source of truth.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from archivarr.env import dotenv_candidates, load_env_file, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env(env_file: str = ".env") -> list[Path]:
    """Load .env files (never overriding the environment) and stamp a run id."""
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return []

    loaded = [p for p in dotenv_candidates(env_file) if load_env_file(p)]

    os.environ.setdefault(
        "ARCHIVARR_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True
    return loaded


def _stamp(name: str, value: object | None) -> None:
    if value is None:
        return
    if isinstance(value, bool):
        os.environ[name] = "1" if value else "0"
    else:
        os.environ[name] = str(value)


def bootstrap_run_context(
    *,
    command: str,
    source_dir: str | None = None,
    archive_dir: str | None = None,
    retention_days: float | None = None,
    suffix: str | None = None,
    overwrite: bool | None = None,
    compress_level: int | None = None,
    dry_run: bool | None = None,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Establish run-scoped context used by logging + the archiver."""

    os.environ["ARCHIVARR_COMMAND"] = command

    _stamp("ARCHIVARR_SOURCE_DIR", source_dir)
    _stamp("ARCHIVARR_ARCHIVE_DIR", archive_dir)
    _stamp("ARCHIVARR_RETENTION_DAYS", retention_days)
    _stamp("ARCHIVARR_SUFFIX", suffix)
    _stamp("ARCHIVARR_OVERWRITE", overwrite)
    _stamp("ARCHIVARR_COMPRESS_LEVEL", compress_level)
    _stamp("ARCHIVARR_DRY_RUN", dry_run)
    _stamp("ARCHIVARR_VERBOSE", verbose)
    _stamp("ARCHIVARR_QUIET", quiet)

    # Context changes must invalidate cached env views.
    reset_env_caches()
