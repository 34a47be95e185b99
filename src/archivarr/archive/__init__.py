"""
Log archiving core.

Archiver scans a log directory, gzips files older than the retention
threshold and moves them into an archive directory, one at a time.
"""

from __future__ import annotations

from .archiver import Archiver
from .errors import (
    ArchiveError,
    CompressionError,
    DirectoryCreationError,
    EnumerationError,
    RelocationError,
)
from .fs import FileSystem, LocalFileSystem
from .models import (
    ArchiveRecord,
    ArchiveSummary,
    FileStat,
    LogFile,
    RecordOutcome,
    ScanResult,
)
from .policy import COMPRESSED_SUFFIX, RetentionPolicy, archive_name

__all__ = [
    "Archiver",
    "ArchiveError",
    "CompressionError",
    "DirectoryCreationError",
    "EnumerationError",
    "RelocationError",
    "FileSystem",
    "LocalFileSystem",
    "ArchiveRecord",
    "ArchiveSummary",
    "FileStat",
    "LogFile",
    "RecordOutcome",
    "ScanResult",
    "COMPRESSED_SUFFIX",
    "RetentionPolicy",
    "archive_name",
]
