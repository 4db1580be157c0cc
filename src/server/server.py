"""Server bootstrap for the file procedures MCP service.

Creates the FastMCP instance, builds the FileAccess realization and the
adapter from configuration, registers the four file tools, and starts the
MCP server (stdio transport).
"""

import asyncio
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from access.access_factory import get_file_access
from adapter.file_adapter import FileOperationAdapter
from clients.archive_client import ArchiveClient
from config import (
    FAIL_ON_MISSING,
    FILE_ARCHIVE,
    FILE_ARCHIVE_URL,
    FILE_BACKEND,
    FILE_ENCODING,
    HTTP_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
    PROJECT_ROOT,
)
from core.interfaces import FileAccess
from core.logging_setup import configure_logging
from core.models import AdapterConfig

from tools.delete_file import register as register_delete_file
from tools.get_files import register as register_get_files
from tools.get_text_files import register as register_get_text_files
from tools.save_file import register as register_save_file

logger = logging.getLogger(__name__)

mcp = FastMCP("file-procedures-mcp")


def build_file_access(archive_client: Optional[ArchiveClient] = None) -> FileAccess:
    archive_bytes = None
    if FILE_BACKEND == "virtual" and FILE_ARCHIVE_URL:
        client = archive_client or ArchiveClient(timeout=HTTP_TIMEOUT, verify=HTTP_VERIFY)
        archive_bytes = asyncio.run(client.fetch_archive(FILE_ARCHIVE_URL))

    return get_file_access(
        FILE_BACKEND,
        root=PROJECT_ROOT,
        archive=FILE_ARCHIVE,
        archive_bytes=archive_bytes,
    )


def build_adapter(access: FileAccess) -> FileOperationAdapter:
    config = AdapterConfig(encoding=FILE_ENCODING, fail_on_missing=FAIL_ON_MISSING)
    return FileOperationAdapter(access, config)


def register_tools(server: FastMCP, adapter: FileOperationAdapter) -> None:
    register_get_text_files(server, adapter=adapter)
    register_get_files(server, adapter=adapter)
    register_save_file(server, adapter=adapter)
    register_delete_file(server, adapter=adapter)


def main() -> None:
    configure_logging(LOG_LEVEL)
    adapter = build_adapter(build_file_access())
    logger.info(
        f"Serving {FILE_BACKEND} files (encoding={adapter.config.encoding}, "
        f"fail_on_missing={adapter.config.fail_on_missing})"
    )
    register_tools(mcp, adapter)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
