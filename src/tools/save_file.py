"""MCP tool that saves content to a file, overwriting any existing file.

Registers the 'saveFile' tool. The content arrives as a string and is
interpreted according to content_type: character data (clob), base64
binary data (blob) or an XML document (xml).
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Literal

from mcp.server.fastmcp import FastMCP

from adapter.file_adapter import FileOperationAdapter
from core.errors import InvalidRequestError
from core.lobs import BinaryContent, CharacterContent, SaveContent, XmlContent
from core.models import SAVE_FILE

ContentType = Literal["clob", "blob", "xml"]


def _payload(file: str, content_type: str) -> SaveContent:
    kind = (content_type or "clob").strip().lower()
    if kind == "clob":
        return CharacterContent(file)
    if kind == "xml":
        return XmlContent(file)
    if kind == "blob":
        try:
            return BinaryContent(base64.b64decode(file, validate=True))
        except binascii.Error as e:
            raise InvalidRequestError(f"Blob content is not valid base64: {e}") from e
    raise InvalidRequestError(f"Unsupported content type: {content_type}")


def register(mcp: FastMCP, *, adapter: FileOperationAdapter) -> None:
    @mcp.tool(name=SAVE_FILE)
    async def save_file(
        filePath: str,
        file: str,
        content_type: ContentType = "clob",
    ) -> str:
        """Save the given value to the given path. Any existing file is overwritten.

        Params:
          - filePath: destination path relative to the root (required).
          - file: the contents to save (required).
          - content_type: "clob" (text, encoded with the configured encoding),
            "blob" (base64-encoded bytes) or "xml" (UTF-8 XML document).

        Raises:
          InvalidRequestError for missing inputs; WriteError if writing fails.
        """
        if file is None:
            raise InvalidRequestError("Missing file content")
        payload = _payload(file, content_type)

        def _do() -> None:
            adapter.execute_procedure(SAVE_FILE, [filePath, payload]).close()

        await asyncio.to_thread(_do)
        return f"Saved {filePath}"
