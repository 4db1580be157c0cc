"""In-memory virtual filesystem FileAccess implementation.

Files live in a path -> entry map guarded by a lock; directories are
implicit in the file paths. A ZIP archive can be mounted at any prefix.
Archive entries only carry a modification time, so their creation time is
reported as unknown; files written through write() record a true one.
"""

from __future__ import annotations

import io
import logging
import posixpath
import threading
import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List, Optional

from core.errors import AccessDeniedError, InvalidRequestError
from core.paths import normalize_posix_relpath, split_pattern, split_posix, glob_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _VirtualEntry:
    data: bytes
    last_modified: datetime
    created: Optional[datetime]


class VirtualFileHandle:
    def __init__(self, path: str, entry: _VirtualEntry) -> None:
        self._path = path
        self._entry = entry

    def __repr__(self) -> str:
        return f"VirtualFileHandle({self._path!r})"

    @property
    def name(self) -> str:
        return posixpath.basename(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def last_modified_time(self) -> datetime:
        return self._entry.last_modified

    @property
    def creation_time(self) -> Optional[datetime]:
        return self._entry.created

    @property
    def size(self) -> int:
        return len(self._entry.data)


class VirtualFileAccess:
    # Virtual (in-memory / archive-backed) implementation of FileAccess.

    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._files: Dict[str, _VirtualEntry] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_archive(cls, archive: Path, *, at: str = "") -> "VirtualFileAccess":
        vfs = cls()
        vfs.mount_archive(Path(archive).read_bytes(), at=at)
        return vfs

    def _normalize(self, path: str) -> str:
        parts = split_posix(normalize_posix_relpath(path))
        if ".." in parts:
            raise AccessDeniedError(f"Access outside root is not allowed: {path}")
        return "/".join(parts)

    def _is_dir(self, path: str) -> bool:
        if not path:
            return True
        prefix = path + "/"
        return any(p.startswith(prefix) for p in self._files)

    def mount_archive(self, data: bytes, *, at: str = "") -> int:
        """Load every file entry of a ZIP archive under the prefix `at`.

        Returns the number of files mounted.
        """
        prefix = self._normalize(at)
        try:
            zf = zipfile.ZipFile(io.BytesIO(data))
        except zipfile.BadZipFile as e:
            raise InvalidRequestError(f"Not a ZIP archive: {e}") from e

        count = 0
        with zf, self._lock:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                path = self._normalize(posixpath.join(prefix, info.filename))
                self._files[path] = _VirtualEntry(
                    data=zf.read(info),
                    last_modified=datetime(*info.date_time),
                    created=None,
                )
                count += 1

        logger.info(f"Mounted {count} archive file(s) at '/{prefix}'")
        return count

    def resolve(self, pattern: str) -> List[VirtualFileHandle]:
        base, glob = split_pattern(self._normalize(pattern))
        prefix = base + "/" if base else ""

        with self._lock:
            snapshot = dict(self._files)

        if not glob:
            if base in snapshot:
                return [VirtualFileHandle(base, snapshot[base])]
            # Direct children of a directory
            paths = [
                p for p in snapshot
                if p.startswith(prefix) and "/" not in p[len(prefix):]
            ]
        else:
            paths = [
                p for p in snapshot
                if p.startswith(prefix) and glob_match(p[len(prefix):], glob)
            ]

        return [VirtualFileHandle(p, snapshot[p]) for p in sorted(paths)]

    def open(self, handle: VirtualFileHandle) -> BinaryIO:
        path = self._normalize(handle.path)
        with self._lock:
            entry = self._files.get(path)
        if entry is None:
            raise FileNotFoundError(f"No such virtual file: {handle.path}")
        return io.BytesIO(entry.data)

    def write(self, path: str, content: BinaryIO) -> None:
        p = self._normalize(path)
        data = content.read()
        now = self._clock()

        with self._lock:
            if self._is_dir(p):
                raise IsADirectoryError(f"Cannot write over a directory: {path}")
            parts = p.split("/")
            for i in range(1, len(parts)):
                if "/".join(parts[:i]) in self._files:
                    raise NotADirectoryError(f"Parent is a file: {path}")
            existing = self._files.get(p)
            # Overwriting keeps the first creation time
            created = existing.created if existing is not None else now
            self._files[p] = _VirtualEntry(data=data, last_modified=now, created=created)
        logger.debug(f"Wrote virtual file {p} ({len(data)} bytes)")

    def remove(self, path: str) -> bool:
        p = self._normalize(path)
        with self._lock:
            if p not in self._files:
                if self._is_dir(p):
                    raise IsADirectoryError(f"Cannot remove a non-empty directory: {path}")
                return False
            del self._files[p]
        logger.debug(f"Removed virtual file {p}")
        return True
