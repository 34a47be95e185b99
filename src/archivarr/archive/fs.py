from __future__ import annotations

import errno
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .models import FileStat


class FileSystem(ABC):
    """
    The filesystem operations the archiver needs.

    Implementations raise OSError (or a subclass) on failure; the archiver
    maps those onto its own error kinds.
    """

    @abstractmethod
    def makedirs(self, path: Path) -> None:
        """Create path and parents. Succeeds if it already exists."""

    @abstractmethod
    def scan(self, path: Path) -> list[FileStat]:
        """Direct entries of a directory. Symlinks are reported as non-files."""

    @abstractmethod
    def open_read(self, path: Path) -> BinaryIO:
        ...

    @abstractmethod
    def open_write(self, path: Path) -> BinaryIO:
        ...

    @abstractmethod
    def replace(self, src: Path, dst: Path) -> None:
        """Atomic rename within one directory, replacing dst."""

    @abstractmethod
    def move(self, src: Path, dst: Path) -> None:
        """Move src to dst, possibly across devices, replacing dst."""

    @abstractmethod
    def remove(self, path: Path) -> None:
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        ...

    @abstractmethod
    def size(self, path: Path) -> int:
        ...

    @abstractmethod
    def set_mtime(self, path: Path, mtime: float) -> None:
        ...


class LocalFileSystem(FileSystem):
    def makedirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def scan(self, path: Path) -> list[FileStat]:
        out: list[FileStat] = []
        with os.scandir(path) as it:
            for entry in it:
                is_file = entry.is_file(follow_symlinks=False)
                st = entry.stat(follow_symlinks=False)
                out.append(
                    FileStat(
                        name=entry.name,
                        path=Path(entry.path),
                        mtime=st.st_mtime,
                        size=st.st_size,
                        is_file=is_file,
                    )
                )
        return out

    def open_read(self, path: Path) -> BinaryIO:
        return path.open("rb")

    def open_write(self, path: Path) -> BinaryIO:
        return path.open("wb")

    def replace(self, src: Path, dst: Path) -> None:
        os.replace(src, dst)

    def move(self, src: Path, dst: Path) -> None:
        try:
            os.replace(src, dst)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            shutil.move(str(src), str(dst))

    def remove(self, path: Path) -> None:
        path.unlink()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def size(self, path: Path) -> int:
        return path.stat().st_size

    def set_mtime(self, path: Path, mtime: float) -> None:
        os.utime(path, (mtime, mtime))
