from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from archivarr.env.paths import default_logs_dir

# ------------------------------------------------------------
# dotenv (read-only helper, bootstrap owns usage)
# ------------------------------------------------------------


def load_env_file(path: Path) -> bool:
    """
    Load a .env file into os.environ.
    - Silent when the file is missing
    - Never overrides existing os.environ
    """
    if not path.exists():
        return False
    return load_dotenv(path, override=False)


# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _require(name: str) -> str:
    v = os.environ.get(name)
    if not v:
        raise ConfigError(f"Missing required environment variable: {name}")
    return v


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except ValueError:
        return default


def _parse_float(name: str, v: str) -> float:
    try:
        value = float(v)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {v!r}") from None
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {v!r}")
    return value


def _parse_int(name: str, v: str) -> int:
    try:
        return int(v)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {v!r}") from None


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool
    logs_dir: Path


def get_logs_dir() -> Path:
    raw = os.environ.get("ARCHIVARR_LOGS_DIR")
    path = Path(raw) if raw else default_logs_dir()
    return path.expanduser().resolve()


def get_logging_env() -> LoggingEnvironment:
    return LoggingEnvironment(
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_retention=_as_int(os.environ.get("LOG_RETENTION", "30"), 30),
        verbose=_as_bool(os.environ.get("ARCHIVARR_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("ARCHIVARR_QUIET", "0")),
        logs_dir=get_logs_dir(),
    )


# ------------------------------------------------------------
# Full runtime environment (ARCHIVE RUNS ONLY)
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        # Logging snapshot (immutable)
        self._logging = get_logging_env()

        # ---- REQUIRED ----
        self.source_dir = Path(_require("ARCHIVARR_SOURCE_DIR")).expanduser()

        archive_raw = os.environ.get("ARCHIVARR_ARCHIVE_DIR", "")
        self.archive_dir = (
            Path(archive_raw).expanduser() if archive_raw else self.source_dir / "archive"
        )

        # ---- POLICY ----
        self.retention_days = _parse_float(
            "ARCHIVARR_RETENTION_DAYS", os.environ.get("ARCHIVARR_RETENTION_DAYS", "7")
        )
        if self.retention_days < 0:
            raise ConfigError(
                f"ARCHIVARR_RETENTION_DAYS must not be negative, got {self.retention_days}"
            )

        self.suffix = os.environ.get("ARCHIVARR_SUFFIX", ".log")
        self.overwrite = _as_bool(os.environ.get("ARCHIVARR_OVERWRITE", "1"))

        self.compress_level = _parse_int(
            "ARCHIVARR_COMPRESS_LEVEL", os.environ.get("ARCHIVARR_COMPRESS_LEVEL", "9")
        )
        if not 1 <= self.compress_level <= 9:
            raise ConfigError(
                f"ARCHIVARR_COMPRESS_LEVEL must be between 1 and 9, got {self.compress_level}"
            )

        # ---- RUN CONTEXT ----
        self.command = os.environ.get("ARCHIVARR_COMMAND", "bootstrap")
        self.dry_run = _as_bool(os.environ.get("ARCHIVARR_DRY_RUN", "0"))

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "logs_dir": str(self.logs_dir),
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Directories": {
                "source_dir": str(self.source_dir),
                "archive_dir": str(self.archive_dir),
            },
            "Policy": {
                "retention_days": self.retention_days,
                "suffix": self.suffix or "(any)",
                "overwrite": self.overwrite,
                "compress_level": self.compress_level,
            },
            "Run": {
                "command": self.command,
                "dry_run": self.dry_run,
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def logs_dir(self) -> Path:
        return self._logging.logs_dir

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
