from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def enforce_retention(log_dir: Path, keep: int) -> list[Path]:
    """
    Prune run logs in log_dir, keeping the `keep` most recent by mtime.

    Returns the paths that were removed. keep <= 0 disables pruning.
    """
    if keep <= 0 or not log_dir.exists():
        return []

    logs = sorted(
        log_dir.glob("*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    removed: list[Path] = []
    for old in logs[keep:]:
        try:
            old.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            log.warning(f"Could not prune run log {old}: {e}")
            continue
        removed.append(old)

    return removed
