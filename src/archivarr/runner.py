from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from archivarr.archive import (
    ArchiveError,
    ArchiveRecord,
    ArchiveSummary,
    Archiver,
    FileSystem,
    RetentionPolicy,
)
from archivarr.branding import ARCHIVARR_HEADER, ARCHIVARR_SECTION_END, SYMBOLS
from archivarr.env import ConfigError, get_env
from archivarr.logger import get_logger, log_passthrough

log = get_logger("archivarr.runner")


class RunResult(str, Enum):
    OK = "ok"
    FAILED = "failed"
    CONFIG_INVALID = "config_invalid"


# RUN_STATUS values written to the run log (read back by `runs`)
RUN_STATUS = {
    RunResult.OK: "completed",
    RunResult.FAILED: "failed",
    RunResult.CONFIG_INVALID: "config_invalid",
}

EXIT_CODES = {
    RunResult.OK: 0,
    RunResult.FAILED: 1,
    RunResult.CONFIG_INVALID: 2,
}


@dataclass(frozen=True)
class RunOutcome:
    result: RunResult
    summary: Optional[ArchiveSummary] = None
    error: Optional[Exception] = None
    records: list[ArchiveRecord] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.result]

    @property
    def reason(self) -> Optional[str]:
        if isinstance(self.error, ArchiveError):
            return self.error.kind
        if isinstance(self.error, ConfigError):
            return "config"
        return None


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------


def build_archiver(*, fs: Optional[FileSystem] = None, on_record=None) -> Archiver:
    env = get_env()
    policy = RetentionPolicy(
        days=env.retention_days,
        suffix=env.suffix,
        overwrite=env.overwrite,
        level=env.compress_level,
    )
    return Archiver(
        env.source_dir,
        env.archive_dir,
        policy,
        fs=fs,
        on_record=on_record,
    )


def _write_status(result: RunResult, reason: Optional[str] = None) -> None:
    line = f"RUN_STATUS={RUN_STATUS[result]}"
    if reason:
        line += f" reason={reason}"
    log.info(line)


# ------------------------------------------------------------
# Core execution
# ------------------------------------------------------------


def run_once(
    *,
    dry_run: bool | None = None,
    fs: Optional[FileSystem] = None,
) -> RunOutcome:
    """
    Perform one archive run (or plan) from the resolved environment.

    Never raises for archive or configuration failures: they are logged,
    stamped into the run log as RUN_STATUS, and returned in the outcome.
    """
    records: list[ArchiveRecord] = []

    try:
        env = get_env()
        archiver = build_archiver(fs=fs, on_record=records.append)
    except ConfigError as e:
        log.error(f"Configuration error: {e}")
        _write_status(RunResult.CONFIG_INVALID, "config")
        return RunOutcome(result=RunResult.CONFIG_INVALID, error=e)

    plan_only = env.dry_run if dry_run is None else bool(dry_run)
    title = "Archive Plan" if plan_only else "Archive Run"

    log.info(ARCHIVARR_HEADER(title).rstrip("\n"))
    log.info(f"Source:    {archiver.source_dir}")
    log.info(f"Archive:   {archiver.archive_dir}")
    log.info(f"Retention: {archiver.policy.days} day(s)")

    try:
        summary = archiver.plan() if plan_only else archiver.run()
    except ArchiveError as e:
        log.error(f"Archive run aborted ({e.kind}): {e}")
        if e.__cause__ is not None:
            log.debug(f"Cause: {e.__cause__!r}")
        log_passthrough(
            logging.ERROR,
            f"{SYMBOLS.FAIL} Done: failed after {len(records)} file(s) archived",
        )
        _write_status(RunResult.FAILED, e.kind)
        log.info(ARCHIVARR_SECTION_END())
        return RunOutcome(result=RunResult.FAILED, error=e, records=records)

    log_passthrough(logging.INFO, f"{SYMBOLS.OK} Done: OK. {summary.describe()}")
    _write_status(RunResult.OK)
    log.info(ARCHIVARR_SECTION_END())
    return RunOutcome(result=RunResult.OK, summary=summary, records=records)
