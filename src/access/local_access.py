from __future__ import annotations

import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from core.errors import AccessDeniedError
from core.paths import normalize_posix_relpath, split_pattern, split_posix, glob_match


"""Local filesystem FileAccess implementation.

Provides sandboxed access to files under a root directory with strong
containment checks to prevent access outside of it.
"""

logger = logging.getLogger(__name__)


class LocalFileHandle:
    # Metadata is stat-ed on first access only, then reused.

    def __init__(self, fs_path: Path, rel_path: str) -> None:
        self._fs_path = fs_path
        self._rel_path = rel_path
        self._stat: Optional[os.stat_result] = None

    def __repr__(self) -> str:
        return f"LocalFileHandle({self._rel_path!r})"

    @property
    def name(self) -> str:
        return self._fs_path.name

    @property
    def path(self) -> str:
        return self._rel_path

    def _stat_result(self) -> os.stat_result:
        if self._stat is None:
            self._stat = self._fs_path.stat()
        return self._stat

    @property
    def last_modified_time(self) -> datetime:
        return datetime.fromtimestamp(self._stat_result().st_mtime)

    @property
    def creation_time(self) -> Optional[datetime]:
        # Only some platforms (macOS, BSD, Windows) report a birth time
        birth = getattr(self._stat_result(), "st_birthtime", None)
        if birth is None:
            return None
        return datetime.fromtimestamp(birth)

    @property
    def size(self) -> int:
        return self._stat_result().st_size


class LocalFileAccess:
    # Local filesystem implementation of FileAccess.

    def __init__(self, *, root: Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve_under_root(self, rel_path: str) -> Path:
        p = (self._root / normalize_posix_relpath(rel_path)).resolve()

        # Strong containment check to prevent directory traversal/outside access
        try:
            p.relative_to(self._root)
        except ValueError as e:
            raise AccessDeniedError(f"Access outside root is not allowed: {rel_path}") from e

        return p

    def _handle(self, p: Path) -> LocalFileHandle:
        # Use POSIX-style paths to keep results stable across OSes
        return LocalFileHandle(p, p.relative_to(self._root).as_posix())

    def _files(self, paths: Iterable[Path]) -> List[LocalFileHandle]:
        return [self._handle(p) for p in sorted(paths) if p.is_file()]

    def resolve(self, pattern: str) -> List[LocalFileHandle]:
        base_rel, glob = split_pattern(normalize_posix_relpath(pattern))
        base = self._resolve_under_root(base_rel)

        if not glob:
            if base.is_file():
                return [self._handle(base)]
            if base.is_dir():
                return self._files(base.iterdir())
            return []

        if not base.is_dir():
            return []

        # Single-segment globs only look at the base directory itself
        nested = len(split_posix(glob)) > 1 or "**" in glob
        candidates = base.rglob("*") if nested else base.iterdir()
        return self._files(
            p for p in candidates if glob_match(p.relative_to(base).as_posix(), glob)
        )

    def open(self, handle: LocalFileHandle) -> BinaryIO:
        return open(self._resolve_under_root(handle.path), "rb")

    def write(self, path: str, content: BinaryIO) -> None:
        p = self._resolve_under_root(path)
        if p == self._root or p.is_dir():
            raise IsADirectoryError(f"Cannot write over a directory: {path}")

        p.parent.mkdir(parents=True, exist_ok=True)
        # The target is only replaced once the whole payload has been written
        tmp = tempfile.NamedTemporaryFile(dir=p.parent, prefix=f".{p.name}.", delete=False)
        try:
            with tmp as out:
                shutil.copyfileobj(content, out)
            os.replace(tmp.name, p)
        finally:
            if os.path.exists(tmp.name):
                os.unlink(tmp.name)
        logger.debug(f"Wrote {p}")

    def remove(self, path: str) -> bool:
        p = self._resolve_under_root(path)
        if p == self._root:
            raise AccessDeniedError("Refusing to remove the root directory")
        if not p.exists():
            return False

        # Directories are only removed when empty
        if p.is_dir():
            p.rmdir()
        else:
            p.unlink()
        logger.debug(f"Removed {p}")
        return True
