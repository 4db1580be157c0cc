from __future__ import annotations

import logging

import httpx

from core.errors import ExternalServiceError, InvalidRequestError

logger = logging.getLogger(__name__)


class ArchiveClient:
    """Downloads a ZIP archive to mount into the virtual filesystem."""

    def __init__(self, *, timeout: float = 20.0, verify: bool = False) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

    async def fetch_archive(self, url: str) -> bytes:
        target = (url or "").strip()
        if not target:
            raise InvalidRequestError("Archive URL is empty")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                verify=self._verify,
                follow_redirects=True,
            ) as c:
                r = await c.get(target, headers={"Accept": "application/zip"})
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(f"Archive server returned an error: {e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to download archive: {e}") from e

        logger.info(f"Downloaded archive {target} ({len(r.content)} bytes)")
        return r.content
