from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------
# Base directories (override-friendly)
# ---------------------------------------------------------------------

# Archivarr installs as a console script: defaults never point inside the
# installed package.


def state_dir() -> Path:
    """
    Per-user state directory ($XDG_STATE_HOME/archivarr, else ~/.local/state/archivarr).
    """
    raw = os.environ.get("XDG_STATE_HOME")
    base = Path(raw) if raw else Path.home() / ".local" / "state"
    return base.expanduser() / "archivarr"


def default_logs_dir() -> Path:
    return state_dir() / "logs"


def dotenv_candidates(env_file: str = ".env") -> list[Path]:
    """
    .env files considered at bootstrap: only the working directory.
    """
    return [Path.cwd() / env_file]
