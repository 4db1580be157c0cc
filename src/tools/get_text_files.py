"""MCP tool that returns text files matching a path and pattern.

Registers the 'getTextFiles' tool which runs the list-text operation
through the FileOperationAdapter and returns one row per matched file.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from adapter.file_adapter import FileOperationAdapter
from config import MAX_FILE_CHARS
from core.errors import InvalidRequestError
from core.models import GET_TEXT_FILES, RESULT_COLUMNS
from tools.rows import text_row


def register(mcp: FastMCP, *, adapter: FileOperationAdapter) -> None:
    @mcp.tool(name=GET_TEXT_FILES)
    async def get_text_files(
        pathAndPattern: str,
        columns: Optional[List[str]] = None,
        max_chars: int = MAX_FILE_CHARS,
    ) -> List[Dict[str, Any]]:
        """Return text files that match the given path and pattern.

        Params:
          - pathAndPattern: a file, a directory, or a directory plus a glob
            such as "docs/*.txt" or "docs/**/*.md" (relative to the root).
          - columns: result columns to return, any of "file", "filePath",
            "lastModified", "created", "size" (default: all). Asking for
            only "file" and "filePath" skips metadata lookups.
          - max_chars: maximum characters of content per file.

        Returns:
          One dict per file, in resolution order. "file" holds the decoded
          text, truncated with "...[TRUNCATED]..." past max_chars.

        Raises:
          InvalidRequestError for missing inputs; NotFoundError when nothing
          matches and missing files are configured as an error.
        """
        if pathAndPattern is None:
            raise InvalidRequestError("Missing pathAndPattern")
        wanted = tuple(columns) if columns else RESULT_COLUMNS

        def _do() -> List[Dict[str, Any]]:
            with adapter.execute_procedure(GET_TEXT_FILES, [pathAndPattern], columns=wanted) as handle:
                return [text_row(record, columns=wanted, max_chars=max_chars) for record in handle]

        # Offload blocking filesystem IO to a thread to keep async loop responsive
        return await asyncio.to_thread(_do)
