"""File operation adapter.

Translates the four file procedures into calls against an injected
FileAccess and hands back an OperationHandle: a one-pass cursor over the
matched files (listings) or an already-finished, row-less result
(save/delete).

Lifecycle of a handle: execute -> next* -> close. Records are built one per
next() call; each record carries a lazily opened LOB and the caller owns
any stream it opens from it.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, List, Optional, Sequence, Union

from core.errors import (
    DeleteError,
    InvalidRequestError,
    NotFoundError,
    ResolutionError,
    StorageIOError,
    WriteError,
)
from core.interfaces import FileAccess, FileHandle
from core.lobs import BinaryLob, StreamFactory, TextLob, to_byte_stream
from core.models import (
    RESULT_COLUMNS,
    AdapterConfig,
    FileRecord,
    OperationRequest,
    kind_for_procedure,
)

logger = logging.getLogger(__name__)


class OperationHandle:
    """Cursor over one operation's result rows.

    Not safe for concurrent next() calls; iterate from a single caller.
    """

    def __init__(
        self,
        *,
        request: OperationRequest,
        access: FileAccess,
        config: AdapterConfig,
        files: Optional[List[FileHandle]] = None,
    ) -> None:
        self._request = request
        self._access = access
        self._config = config
        self._files: List[FileHandle] = list(files or [])
        self._index = 0
        self._closed = False

    @property
    def request(self) -> OperationRequest:
        return self._request

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def exhausted(self) -> bool:
        return self._closed or self._index >= len(self._files)

    def next(self) -> Optional[FileRecord]:
        """Return the next record, or None at end of sequence."""
        if not self._request.is_listing or self.exhausted:
            return None

        handle = self._files[self._index]
        self._index += 1
        logger.debug(f"Getting {handle.path}")
        return self._build_record(handle)

    def _build_record(self, handle: FileHandle) -> FileRecord:
        factory = functools.partial(self._access.open, handle)

        if not self._request.projects_metadata:
            return FileRecord(content=self._lob(factory, None), name=handle.name, has_metadata=False)

        try:
            last_modified = handle.last_modified_time
            created = handle.creation_time
            size = handle.size
        except OSError as e:
            raise StorageIOError(f"Failed to read metadata for {handle.path}: {e}") from e

        # Backends without a creation time report the modification time
        if created is None:
            created = last_modified

        return FileRecord(
            content=self._lob(factory, size),
            name=handle.name,
            last_modified=last_modified,
            created=created,
            size=size,
        )

    def _lob(self, factory: StreamFactory, length: Optional[int]) -> Union[TextLob, BinaryLob]:
        if self._request.kind == "list-text":
            return TextLob(factory, encoding=self._config.encoding, length=length)
        return BinaryLob(factory, length=length)

    def close(self) -> None:
        # Opened content streams belong to the caller and stay open
        self._files = []
        self._closed = True

    def __iter__(self) -> "OperationHandle":
        return self

    def __next__(self) -> FileRecord:
        record = self.next()
        if record is None:
            raise StopIteration
        return record

    def __enter__(self) -> "OperationHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class FileOperationAdapter:
    """Runs getTextFiles/getFiles/saveFile/deleteFile against a FileAccess.

    The adapter holds no per-operation state; every execute() returns an
    independent handle, so separate operations may run concurrently.
    """

    def __init__(self, access: FileAccess, config: Optional[AdapterConfig] = None) -> None:
        self._access = access
        self._config = config or AdapterConfig()

    @property
    def config(self) -> AdapterConfig:
        return self._config

    @property
    def access(self) -> FileAccess:
        return self._access

    def execute(self, request: OperationRequest) -> OperationHandle:
        if request is None:
            raise InvalidRequestError("Missing request")

        if request.is_listing:
            return self._list(request)
        if request.kind == "save":
            self._save(request)
        elif request.kind == "delete":
            self._delete(request)
        else:
            raise InvalidRequestError(f"Unknown operation kind: {request.kind}")

        return OperationHandle(request=request, access=self._access, config=self._config)

    def execute_procedure(
        self,
        name: str,
        arguments: Sequence[Any],
        *,
        columns: Optional[Sequence[str]] = None,
    ) -> OperationHandle:
        """Execute a procedure by name with positional arguments.

        getTextFiles/getFiles take (pathAndPattern,), saveFile takes
        (filePath, file) and deleteFile takes (filePath,).
        """
        kind = kind_for_procedure(name)
        args = list(arguments or [])
        path = args[0] if args else None
        content = args[1] if kind == "save" and len(args) > 1 else None

        request = OperationRequest(
            kind=kind,
            path=path,
            content=content,
            columns=tuple(columns) if columns else RESULT_COLUMNS,
        )
        return self.execute(request)

    def next(self, handle: OperationHandle) -> Optional[FileRecord]:
        return handle.next()

    def close(self, handle: OperationHandle) -> None:
        handle.close()

    # --- operations ---

    def _list(self, request: OperationRequest) -> OperationHandle:
        pattern = request.path
        if pattern is None or not isinstance(pattern, str):
            raise InvalidRequestError("pathAndPattern must be non-null")

        unknown = [c for c in request.columns if c not in RESULT_COLUMNS]
        if unknown or not request.columns:
            raise InvalidRequestError(f"Invalid result columns: {list(request.columns)}")

        try:
            files = list(self._access.resolve(pattern))
        except OSError as e:
            raise ResolutionError(f"Failed to resolve {pattern}: {e}") from e

        logger.debug(f"Getting {len(files)} file(s)")
        if not files and self._config.fail_on_missing:
            raise NotFoundError(f"File not found: {pattern}")

        return OperationHandle(
            request=request,
            access=self._access,
            config=self._config,
            files=files,
        )

    def _required_path(self, request: OperationRequest) -> str:
        path = request.path
        if path is None or not isinstance(path, str) or not path.strip():
            raise InvalidRequestError("filePath must be non-null")
        return path

    def _save(self, request: OperationRequest) -> None:
        path = self._required_path(request)
        if request.content is None:
            raise InvalidRequestError("file must be non-null")

        logger.debug(f"Saving {path}")
        try:
            with to_byte_stream(request.content, self._config.encoding) as stream:
                self._access.write(path, stream)
        except (OSError, UnicodeError, StorageIOError) as e:
            raise WriteError(f"Error writing {path}: {e}") from e

    def _delete(self, request: OperationRequest) -> None:
        path = self._required_path(request)

        logger.debug(f"Deleting {path}")
        try:
            removed = self._access.remove(path)
        except OSError as e:
            raise DeleteError(f"Error deleting {path}: {e}") from e

        if not removed:
            if self._config.fail_on_missing:
                raise NotFoundError(f"File not found: {path}")
            logger.debug(f"Nothing to delete at {path}")
