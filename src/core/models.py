"""Immutable dataclasses for requests, configuration and result records.

OperationRequest carries one procedure call; AdapterConfig carries the
encoding and not-found policy passed into the adapter; FileRecord is one
row of a getTextFiles/getFiles result.
"""

from __future__ import annotations

import codecs
import locale
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Literal, Optional, Tuple, Union

from core.errors import InvalidRequestError
from core.lobs import BinaryLob, SaveContent, TextLob


OperationKind = Literal["list-text", "list-binary", "save", "delete"]

GET_TEXT_FILES = "getTextFiles"
GET_FILES = "getFiles"
SAVE_FILE = "saveFile"
DELETE_FILE = "deleteFile"

PROCEDURE_KINDS: Dict[str, OperationKind] = {
    GET_TEXT_FILES: "list-text",
    GET_FILES: "list-binary",
    SAVE_FILE: "save",
    DELETE_FILE: "delete",
}

RESULT_COLUMNS: Tuple[str, ...] = ("file", "filePath", "lastModified", "created", "size")
CONTENT_COLUMNS: Tuple[str, ...] = RESULT_COLUMNS[:2]


def kind_for_procedure(name: str) -> OperationKind:
    """Map a procedure name (case-insensitive) to its operation kind."""
    wanted = (name or "").strip().lower()
    for proc, kind in PROCEDURE_KINDS.items():
        if proc.lower() == wanted:
            return kind
    raise InvalidRequestError(f"Unknown procedure name: {name}")


def default_encoding() -> str:
    return locale.getpreferredencoding(False)


@dataclass(frozen=True)
class AdapterConfig:
    """Adapter options.

    - encoding: charset used to decode text files and encode character payloads.
    - fail_on_missing: whether an unresolved path/pattern is an error for list/delete.
    """

    encoding: str = field(default_factory=default_encoding)
    fail_on_missing: bool = True

    def __post_init__(self) -> None:
        try:
            canonical = codecs.lookup(self.encoding).name
        except LookupError as e:
            raise InvalidRequestError(f"Unknown encoding: {self.encoding}") from e
        object.__setattr__(self, "encoding", canonical)


@dataclass(frozen=True)
class OperationRequest:
    """One procedure call.

    Field groups:
    - Common: kind, path
    - Save: content
    - Listing: columns (the result columns the caller asked for)
    """

    kind: OperationKind
    path: Optional[str] = None
    content: Optional[SaveContent] = None
    columns: Tuple[str, ...] = RESULT_COLUMNS

    @property
    def is_listing(self) -> bool:
        return self.kind in ("list-text", "list-binary")

    @property
    def projects_metadata(self) -> bool:
        # Only content + name requested: skip the metadata round-trip
        return any(c not in CONTENT_COLUMNS for c in self.columns)


@dataclass(frozen=True)
class FileRecord:
    content: Union[TextLob, BinaryLob]
    name: str
    last_modified: Optional[datetime] = None
    created: Optional[datetime] = None
    size: Optional[int] = None
    has_metadata: bool = True

    def as_row(self) -> tuple:
        if not self.has_metadata:
            return (self.content, self.name)
        return (self.content, self.name, self.last_modified, self.created, self.size)
