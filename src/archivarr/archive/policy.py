from __future__ import annotations

import math
from dataclasses import dataclass

SECONDS_PER_DAY = 86400
COMPRESSED_SUFFIX = ".gz"


@dataclass(frozen=True)
class RetentionPolicy:
    """
    Which files are eligible and how they are archived.

    days:      files whose mtime is strictly older than now - days are eligible
    suffix:    name filter; "" matches every regular file
    overwrite: replace a same-named artifact in the archive dir (like mv)
    level:     gzip compression level
    """

    days: float = 7
    suffix: str = ".log"
    overwrite: bool = True
    level: int = 9

    def __post_init__(self) -> None:
        if not math.isfinite(self.days):
            raise ValueError(f"days must be finite, got {self.days}")
        if self.days < 0:
            raise ValueError(f"days must not be negative, got {self.days}")
        if not 1 <= self.level <= 9:
            raise ValueError(f"level must be between 1 and 9, got {self.level}")

    def cutoff(self, now: float) -> float:
        return now - self.days * SECONDS_PER_DAY

    def matches_name(self, name: str) -> bool:
        if name.endswith(COMPRESSED_SUFFIX):
            return False
        return name.endswith(self.suffix)

    def is_expired(self, mtime: float, now: float) -> bool:
        return mtime < self.cutoff(now)


def archive_name(name: str) -> str:
    return f"{name}{COMPRESSED_SUFFIX}"
