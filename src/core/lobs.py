"""Large objects (LOBs) and save payloads.

A LOB wraps a deferred byte-stream factory: nothing is read while a listing
is produced, and the consumer opens the content on demand, at most once.
The payload classes describe the three content kinds accepted by saveFile.
"""

from __future__ import annotations

import codecs
import io
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, TextIO, Union

from core.errors import InvalidRequestError, StorageIOError, StreamConsumedError


StreamFactory = Callable[[], BinaryIO]


class _LargeObject:
    def __init__(self, factory: StreamFactory, *, length: Optional[int] = None) -> None:
        self._factory = factory
        self._length = length
        self._opened = False

    @property
    def length(self) -> Optional[int]:
        # Byte length when known without opening the stream.
        return self._length

    @property
    def opened(self) -> bool:
        return self._opened

    def _open_stream(self) -> BinaryIO:
        if self._opened:
            raise StreamConsumedError("Content stream was already opened")
        try:
            stream = self._factory()
        except OSError as e:
            raise StorageIOError(f"Failed to open content stream: {e}") from e
        self._opened = True
        return stream


class BinaryLob(_LargeObject):
    """Binary large object: bytes opened lazily, once."""

    def open(self) -> BinaryIO:
        return self._open_stream()

    def read_bytes(self) -> bytes:
        with self.open() as stream:
            return stream.read()


class TextLob(_LargeObject):
    """Character large object: bytes decoded with a fixed encoding."""

    def __init__(
        self,
        factory: StreamFactory,
        *,
        encoding: str,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(factory, length=length)
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def open(self) -> TextIO:
        return io.TextIOWrapper(self._open_stream(), encoding=self._encoding)

    def read_text(self) -> str:
        with self.open() as stream:
            return stream.read()


@dataclass(frozen=True)
class CharacterContent:
    """Character payload; encoded with the configured encoding on save."""

    value: Union[str, TextIO]


@dataclass(frozen=True)
class BinaryContent:
    """Binary payload; written as-is."""

    value: Union[bytes, BinaryIO]


@dataclass(frozen=True)
class XmlContent:
    """XML payload; text is serialized as UTF-8, bytes are written as-is."""

    value: Union[str, bytes, BinaryIO]


SaveContent = Union[CharacterContent, BinaryContent, XmlContent, TextLob, BinaryLob]


class _EncodingReader(io.RawIOBase):
    # Binary view over a text stream, encoding incrementally as it is read.

    def __init__(self, text: TextIO, encoding: str, *, chunk_chars: int = 8192) -> None:
        self._text = text
        self._encoder = codecs.getincrementalencoder(encoding)()
        self._chunk_chars = chunk_chars
        self._pending = b""
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        while not self._pending and not self._eof:
            chunk = self._text.read(self._chunk_chars)
            if chunk:
                self._pending = self._encoder.encode(chunk)
            else:
                self._pending = self._encoder.encode("", final=True)
                self._eof = True

        n = min(len(b), len(self._pending))
        b[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        if not self.closed:
            self._text.close()
        super().close()


def _encode_text_stream(text: TextIO, encoding: str) -> BinaryIO:
    return io.BufferedReader(_EncodingReader(text, encoding))


def to_byte_stream(content: SaveContent, encoding: str) -> BinaryIO:
    """Extract a byte stream from one of the accepted save payloads."""
    if isinstance(content, XmlContent):
        value = content.value
        if isinstance(value, str):
            return io.BytesIO(value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray)):
            return io.BytesIO(bytes(value))
        return value

    if isinstance(content, CharacterContent):
        value = content.value
        text = io.StringIO(value) if isinstance(value, str) else value
        return _encode_text_stream(text, encoding)

    if isinstance(content, BinaryContent):
        value = content.value
        if isinstance(value, (bytes, bytearray)):
            return io.BytesIO(bytes(value))
        return value

    if isinstance(content, TextLob):
        # Re-encode so the saved file uses the configured encoding
        return _encode_text_stream(content.open(), encoding)

    if isinstance(content, BinaryLob):
        return content.open()

    raise InvalidRequestError(f"Unsupported content type: {type(content).__name__}")
