"""MCP tool that deletes a file."""

from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from adapter.file_adapter import FileOperationAdapter
from core.models import DELETE_FILE


def register(mcp: FastMCP, *, adapter: FileOperationAdapter) -> None:
    @mcp.tool(name=DELETE_FILE)
    async def delete_file(filePath: str) -> str:
        """Delete the given file path.

        Raises NotFoundError if the path does not exist and missing files are
        configured as an error; DeleteError if the store fails to remove it.
        """

        def _do() -> None:
            adapter.execute_procedure(DELETE_FILE, [filePath]).close()

        await asyncio.to_thread(_do)
        return f"Deleted {filePath}"
