import httpx
import pytest

from clients.archive_client import ArchiveClient
from core.errors import ExternalServiceError, InvalidRequestError


def _transport(handler):
    return httpx.MockTransport(handler)


def _patch_client(monkeypatch, handler):
    # Patch AsyncClient to use MockTransport.
    orig = httpx.AsyncClient

    def patched_async_client(*args, **kwargs):
        kwargs["transport"] = _transport(handler)
        return orig(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", patched_async_client)


@pytest.mark.asyncio
async def test_fetch_archive_success(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/files.zip"
        return httpx.Response(200, content=b"PK\x03\x04")

    _patch_client(monkeypatch, handler)
    c = ArchiveClient(timeout=5.0, verify=False)

    out = await c.fetch_archive("https://archives.example/files.zip")
    assert out == b"PK\x03\x04"


@pytest.mark.asyncio
async def test_fetch_archive_empty_url_raises():
    c = ArchiveClient(timeout=5.0, verify=False)
    with pytest.raises(InvalidRequestError):
        await c.fetch_archive("  ")


@pytest.mark.asyncio
async def test_fetch_archive_http_error_raises(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    _patch_client(monkeypatch, handler)
    c = ArchiveClient(timeout=5.0, verify=False)

    with pytest.raises(ExternalServiceError):
        await c.fetch_archive("https://archives.example/files.zip")


@pytest.mark.asyncio
async def test_fetch_archive_transport_error_raises(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    _patch_client(monkeypatch, handler)
    c = ArchiveClient(timeout=5.0, verify=False)

    with pytest.raises(ExternalServiceError):
        await c.fetch_archive("https://archives.example/files.zip")
