import logging
import os
import time
from pathlib import Path

import pytest

from memfs import MemoryFileSystem


_ENV_KEYS = [
    "ARCHIVARR_SOURCE_DIR",
    "ARCHIVARR_ARCHIVE_DIR",
    "ARCHIVARR_RETENTION_DAYS",
    "ARCHIVARR_SUFFIX",
    "ARCHIVARR_OVERWRITE",
    "ARCHIVARR_COMPRESS_LEVEL",
    "ARCHIVARR_DRY_RUN",
    "ARCHIVARR_LOGS_DIR",
    "ARCHIVARR_COMMAND",
    "ARCHIVARR_RUN_ID",
    "ARCHIVARR_VERBOSE",
    "ARCHIVARR_QUIET",
    "LOG_LEVEL",
    "LOG_RETENTION",
]


def _reset_logging_state() -> None:
    import archivarr.logger.state as state

    state.INITIALIZED = False
    state.RUN_ID = None
    state.LOG_DIR = None
    state.LOG_FILE_PATH = None

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


@pytest.fixture(autouse=True)
def clean_env_and_state(tmp_path, monkeypatch):
    """
    Ensure tests don't leak env, logger state, cached env views, or run logs.
    """
    for k in _ENV_KEYS:
        monkeypatch.delenv(k, raising=False)

    # Run logs go to the test's tmp dir, never the project
    monkeypatch.setenv("ARCHIVARR_LOGS_DIR", str(tmp_path / "runlogs"))

    # Keep bootstrap from picking up a developer's .env
    monkeypatch.chdir(tmp_path)

    import archivarr.bootstrap as bootstrap
    from archivarr.env import reset_env_caches

    monkeypatch.setattr(bootstrap, "_BOOTSTRAPPED", False)
    reset_env_caches()
    _reset_logging_state()

    yield

    reset_env_caches()
    _reset_logging_state()


def write_log(path: Path, text: str = "line\n", *, age_days: float = 0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    ts = time.time() - age_days * 86400
    os.utime(path, (ts, ts))
    return path


@pytest.fixture
def make_log():
    return write_log


@pytest.fixture
def memfs():
    return MemoryFileSystem()
