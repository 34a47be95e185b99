from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class RecordOutcome(str, Enum):
    ARCHIVED = "archived"
    PLANNED = "planned"


@dataclass(frozen=True)
class FileStat:
    """A directory entry as reported by a FileSystem scan."""

    name: str
    path: Path
    mtime: float
    size: int
    is_file: bool


@dataclass(frozen=True)
class LogFile:
    path: Path
    mtime: float
    size: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ScanResult:
    considered: int
    eligible: list[LogFile]


@dataclass(frozen=True)
class ArchiveRecord:
    source: Path
    archive: Path
    original_size: int
    compressed_size: Optional[int]
    outcome: RecordOutcome

    def describe(self) -> str:
        if self.outcome == RecordOutcome.PLANNED:
            return f"Would archive {self.source} -> {self.archive}"
        return (
            f"Archived {self.source} -> {self.archive} "
            f"({self.original_size} -> {self.compressed_size} bytes)"
        )


@dataclass
class ArchiveSummary:
    scanned: int = 0
    eligible: int = 0
    archived: int = 0
    bytes_in: int = 0
    bytes_out: int = 0
    dry_run: bool = False
    records: list[ArchiveRecord] = field(default_factory=list)

    def add(self, record: ArchiveRecord) -> None:
        self.records.append(record)
        if record.outcome == RecordOutcome.ARCHIVED:
            self.archived += 1
            self.bytes_in += record.original_size
            self.bytes_out += record.compressed_size or 0

    def describe(self) -> str:
        if self.dry_run:
            return (
                f"Plan complete: {self.eligible} of {self.scanned} file(s) "
                f"would be archived"
            )
        return (
            f"Archive complete: {self.archived} of {self.scanned} file(s) archived "
            f"({self.bytes_in} -> {self.bytes_out} bytes)"
        )
