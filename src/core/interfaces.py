"""Core protocol and interface definitions.

Defines the FileAccess capability that both realizations (local disk and
virtual/archive) implement, and the FileHandle they hand out. The adapter
is written against these protocols only.
"""

from __future__ import annotations

from datetime import datetime
from typing import BinaryIO, List, Optional, Protocol


class FileHandle(Protocol):
    """One addressable file returned by FileAccess.resolve().

    Metadata accessors are lazy: reading them may hit the backing store.
    """

    @property
    def name(self) -> str:
        ...

    @property
    def path(self) -> str:
        ...

    @property
    def last_modified_time(self) -> datetime:
        ...

    @property
    def creation_time(self) -> Optional[datetime]:
        ...

    @property
    def size(self) -> int:
        ...


class FileAccess(Protocol):
    """Contract for any backing file store (local disk, virtual archive)."""

    def resolve(self, pattern: str) -> List[FileHandle]:
        ...

    def open(self, handle: FileHandle) -> BinaryIO:
        ...

    def write(self, path: str, content: BinaryIO) -> None:
        ...

    def remove(self, path: str) -> bool:
        ...
