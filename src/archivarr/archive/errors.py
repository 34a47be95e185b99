from __future__ import annotations

from pathlib import Path


class ArchiveError(Exception):
    """Base error for an archive run. Always fatal to the run."""

    kind = "archive_error"

    def __init__(self, path: Path, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class DirectoryCreationError(ArchiveError):
    """Archive directory could not be created."""

    kind = "directory_creation"


class EnumerationError(ArchiveError):
    """Source directory is missing or unreadable."""

    kind = "enumeration"


class CompressionError(ArchiveError):
    """A log file could not be compressed; the original is left untouched."""

    kind = "compression"


class RelocationError(ArchiveError):
    """A compressed artifact could not be moved into the archive directory."""

    kind = "relocation"
