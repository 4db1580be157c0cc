"""MCP tool that returns files matching a path and pattern as binary.

Registers the 'getFiles' tool; file contents are returned base64-encoded.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from adapter.file_adapter import FileOperationAdapter
from core.errors import InvalidRequestError
from core.models import GET_FILES, RESULT_COLUMNS
from tools.rows import binary_row


def register(mcp: FastMCP, *, adapter: FileOperationAdapter) -> None:
    @mcp.tool(name=GET_FILES)
    async def get_files(
        pathAndPattern: str,
        columns: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Return files that match the given path and pattern as base64 blobs.

        Params:
          - pathAndPattern: a file, a directory, or a directory plus a glob.
          - columns: result columns to return (default: all five).

        Returns:
          One dict per file, in resolution order; "file" is base64 of the bytes.
        """
        if pathAndPattern is None:
            raise InvalidRequestError("Missing pathAndPattern")
        wanted = tuple(columns) if columns else RESULT_COLUMNS

        def _do() -> List[Dict[str, Any]]:
            with adapter.execute_procedure(GET_FILES, [pathAndPattern], columns=wanted) as handle:
                return [binary_row(record, columns=wanted) for record in handle]

        return await asyncio.to_thread(_do)
