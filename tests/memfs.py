from __future__ import annotations

import errno
import io
from pathlib import Path

from archivarr.archive import FileStat, FileSystem


class _WriteBuffer(io.BytesIO):
    def __init__(self, fs: "MemoryFileSystem", path: Path, fail_after: int | None):
        super().__init__()
        self._fs = fs
        self._path = path
        self._fail_after = fail_after

    def write(self, data) -> int:
        if self._fail_after is not None and self.tell() + len(data) > self._fail_after:
            raise OSError(errno.ENOSPC, "No space left on device", str(self._path))
        return super().write(data)

    def close(self) -> None:
        if not self.closed:
            self._fs.files[self._path] = self.getvalue()
            self._fs.mtimes.setdefault(self._path, self._fs.now)
        super().close()


class MemoryFileSystem(FileSystem):
    """
    In-memory FileSystem for archiver tests.

    fail(op, path) makes the named operation raise OSError for that path.
    fail_write_after(path, n) lets n bytes through before raising ENOSPC.
    """

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now
        self.files: dict[Path, bytes] = {}
        self.mtimes: dict[Path, float] = {}
        self.dirs: set[Path] = set()
        self._failures: set[tuple[str, Path]] = set()
        self._write_limits: dict[Path, int] = {}

    # ---- test helpers ----

    def add_dir(self, path: Path) -> None:
        for p in (path, *path.parents):
            self.dirs.add(p)

    def add_file(self, path: Path, data: bytes, *, age_days: float) -> Path:
        self.add_dir(path.parent)
        self.files[path] = data
        self.mtimes[path] = self.now - age_days * 86400
        return path

    def fail(self, op: str, path: Path) -> None:
        self._failures.add((op, path))

    def fail_write_after(self, path: Path, n: int) -> None:
        self._write_limits[path] = n

    def _check(self, op: str, path: Path) -> None:
        if (op, path) in self._failures:
            raise OSError(errno.EIO, f"Simulated {op} failure", str(path))

    # ---- FileSystem ----

    def makedirs(self, path: Path) -> None:
        self._check("makedirs", path)
        if path in self.files:
            raise FileExistsError(errno.EEXIST, "File exists", str(path))
        self.add_dir(path)

    def scan(self, path: Path) -> list[FileStat]:
        self._check("scan", path)
        if path not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))

        out = [
            FileStat(name=p.name, path=p, mtime=self.mtimes[p], size=len(data), is_file=True)
            for p, data in self.files.items()
            if p.parent == path
        ]
        out.extend(
            FileStat(name=d.name, path=d, mtime=self.now, size=0, is_file=False)
            for d in self.dirs
            if d.parent == path and d != path
        )
        return out

    def open_read(self, path: Path):
        self._check("open_read", path)
        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file", str(path))
        return io.BytesIO(self.files[path])

    def open_write(self, path: Path):
        self._check("open_write", path)
        if path.parent not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))
        return _WriteBuffer(self, path, self._write_limits.get(path))

    def replace(self, src: Path, dst: Path) -> None:
        self._check("replace", src)
        self._rename(src, dst)

    def move(self, src: Path, dst: Path) -> None:
        self._check("move", src)
        if dst.parent not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such directory", str(dst))
        self._rename(src, dst)

    def _rename(self, src: Path, dst: Path) -> None:
        if src not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file", str(src))
        self.files[dst] = self.files.pop(src)
        self.mtimes[dst] = self.mtimes.pop(src)

    def remove(self, path: Path) -> None:
        self._check("remove", path)
        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file", str(path))
        del self.files[path]
        self.mtimes.pop(path, None)

    def exists(self, path: Path) -> bool:
        self._check("exists", path)
        return path in self.files or path in self.dirs

    def size(self, path: Path) -> int:
        return len(self.files[path])

    def set_mtime(self, path: Path, mtime: float) -> None:
        self.mtimes[path] = mtime
