from __future__ import annotations

import gzip
import shutil
import time
from pathlib import Path
from typing import Callable, Optional

from archivarr.logger import get_logger

from .errors import (
    ArchiveError,
    CompressionError,
    DirectoryCreationError,
    EnumerationError,
    RelocationError,
)
from .fs import FileSystem, LocalFileSystem
from .models import ArchiveRecord, ArchiveSummary, LogFile, RecordOutcome, ScanResult
from .policy import RetentionPolicy, archive_name

log = get_logger("archivarr.archiver")

RecordCallback = Callable[[ArchiveRecord], None]


class Archiver:
    """
    Compress aged log files and move them into an archive directory.

    Runs are sequential and fail fast: the first error is raised unchanged
    and no later file is touched. Files archived before the failure stay
    archived.
    """

    def __init__(
        self,
        source_dir: Path,
        archive_dir: Path,
        policy: RetentionPolicy,
        *,
        fs: Optional[FileSystem] = None,
        clock: Callable[[], float] = time.time,
        on_record: Optional[RecordCallback] = None,
    ):
        self.source_dir = Path(source_dir)
        self.archive_dir = Path(archive_dir)
        self.policy = policy
        self.fs = fs or LocalFileSystem()
        self.clock = clock
        self.on_record = on_record

    # ------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------

    def ensure_archive_dir(self) -> None:
        try:
            self.fs.makedirs(self.archive_dir)
        except OSError as e:
            raise DirectoryCreationError(
                self.archive_dir, "Cannot create archive directory"
            ) from e

    def scan(self) -> ScanResult:
        try:
            entries = self.fs.scan(self.source_dir)
        except OSError as e:
            raise EnumerationError(self.source_dir, "Cannot read log directory") from e

        now = self.clock()
        considered = 0
        eligible: list[LogFile] = []

        for entry in entries:
            if not entry.is_file or not self.policy.matches_name(entry.name):
                continue
            considered += 1
            if self.policy.is_expired(entry.mtime, now):
                eligible.append(LogFile(path=entry.path, mtime=entry.mtime, size=entry.size))

        eligible.sort(key=lambda f: (f.mtime, f.name))
        return ScanResult(considered=considered, eligible=eligible)

    def target_for(self, logfile: LogFile) -> Path:
        return self.archive_dir / archive_name(logfile.name)

    def compress(self, logfile: LogFile) -> Path:
        """
        gzip logfile next to itself and remove the original.

        The compressed stream is written to a temporary name and renamed into
        place once complete, so the original is only removed after a full
        artifact exists.
        """
        src = logfile.path
        gz_path = src.with_name(archive_name(src.name))
        tmp_path = src.with_name(f".{gz_path.name}.part")

        # Never replace a .gz this run did not write.
        if self._exists(gz_path, CompressionError, "Cannot inspect compression target"):
            raise CompressionError(gz_path, "Compressed file already exists next to original")

        try:
            with self.fs.open_read(src) as f_in, self.fs.open_write(tmp_path) as raw:
                with gzip.GzipFile(
                    filename=src.name,
                    mode="wb",
                    compresslevel=self.policy.level,
                    fileobj=raw,
                    mtime=int(logfile.mtime),
                ) as f_out:
                    shutil.copyfileobj(f_in, f_out)
            self.fs.set_mtime(tmp_path, logfile.mtime)
            self.fs.replace(tmp_path, gz_path)
        except OSError as e:
            self._discard(tmp_path)
            raise CompressionError(src, "Compression failed") from e

        try:
            self.fs.remove(src)
        except OSError as e:
            self._discard(gz_path)
            raise CompressionError(src, "Cannot remove original after compression") from e

        return gz_path

    def relocate(self, gz_path: Path) -> Path:
        target = self.archive_dir / gz_path.name
        if not self.policy.overwrite and self._target_exists(target):
            raise RelocationError(target, "Archive already exists")

        try:
            self.fs.move(gz_path, target)
        except OSError as e:
            raise RelocationError(target, "Cannot move archive into place") from e
        return target

    def archive_one(self, logfile: LogFile) -> ArchiveRecord:
        # Reject collisions before touching the original.
        target = self.target_for(logfile)
        if not self.policy.overwrite and self._target_exists(target):
            raise RelocationError(target, "Archive already exists")

        gz_path = self.compress(logfile)
        target = self.relocate(gz_path)

        try:
            compressed_size = self.fs.size(target)
        except OSError:
            compressed_size = None

        return ArchiveRecord(
            source=logfile.path,
            archive=target,
            original_size=logfile.size,
            compressed_size=compressed_size,
            outcome=RecordOutcome.ARCHIVED,
        )

    # ------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------

    def run(self) -> ArchiveSummary:
        log.debug(
            f"Archiving {self.source_dir} -> {self.archive_dir} "
            f"(older than {self.policy.days} day(s), suffix={self.policy.suffix!r})"
        )

        self.ensure_archive_dir()
        scan = self.scan()

        summary = ArchiveSummary(scanned=scan.considered, eligible=len(scan.eligible))
        if not scan.eligible:
            log.info("No log files eligible for archiving")

        for logfile in scan.eligible:
            record = self.archive_one(logfile)
            summary.add(record)
            self._emit(record)

        log.info(summary.describe())
        return summary

    def plan(self) -> ArchiveSummary:
        scan = self.scan()

        summary = ArchiveSummary(
            scanned=scan.considered, eligible=len(scan.eligible), dry_run=True
        )
        for logfile in scan.eligible:
            record = ArchiveRecord(
                source=logfile.path,
                archive=self.target_for(logfile),
                original_size=logfile.size,
                compressed_size=None,
                outcome=RecordOutcome.PLANNED,
            )
            summary.add(record)
            self._emit(record)

        log.info(summary.describe())
        return summary

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _emit(self, record: ArchiveRecord) -> None:
        log.info(record.describe())
        if self.on_record is not None:
            self.on_record(record)

    def _exists(self, path: Path, error: type[ArchiveError], message: str) -> bool:
        try:
            return self.fs.exists(path)
        except OSError as e:
            raise error(path, message) from e

    def _target_exists(self, target: Path) -> bool:
        return self._exists(target, RelocationError, "Cannot inspect archive directory")

    def _discard(self, path: Path) -> None:
        try:
            if self.fs.exists(path):
                self.fs.remove(path)
        except OSError as e:
            log.warning(f"Could not remove partial artifact {path}: {e}")
