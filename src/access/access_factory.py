"""Factory for selecting the FileAccess realization.

Exposes get_file_access which returns either a LocalFileAccess or a
VirtualFileAccess based on the requested backend.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from access.local_access import LocalFileAccess
from access.virtual_access import VirtualFileAccess
from core.errors import InvalidRequestError
from core.interfaces import FileAccess

Backend = Literal["local", "virtual"]


def get_file_access(
    backend: Optional[Backend] = None,
    *,
    root: Path,
    archive: Optional[Path] = None,
    archive_bytes: Optional[bytes] = None,
) -> FileAccess:
    """
    Factory that returns the correct FileAccess implementation.

    - "virtual": an in-memory filesystem, optionally pre-loaded from a ZIP
      archive on disk (`archive`) or already downloaded (`archive_bytes`).
    - "local" (default): the directory tree under `root`.
    """
    kind = (backend or "local").strip().lower()

    if kind == "virtual":
        vfs = VirtualFileAccess()
        if archive is not None:
            vfs.mount_archive(Path(archive).read_bytes())
        if archive_bytes is not None:
            vfs.mount_archive(archive_bytes)
        return vfs

    if kind == "local":
        return LocalFileAccess(root=root)

    raise InvalidRequestError(f"Unknown file backend: {backend}")
