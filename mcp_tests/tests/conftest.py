import io

import pytest

from access.local_access import LocalFileAccess
from access.virtual_access import VirtualFileAccess


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture(params=["local", "virtual"])
def access(request, tmp_path):
    """Both FileAccess realizations, so behavior can be checked on each."""
    if request.param == "local":
        return LocalFileAccess(root=tmp_path)
    return VirtualFileAccess()


@pytest.fixture
def seed(access):
    """Write {path: bytes} through the capability itself."""

    def _seed(files):
        for path, data in files.items():
            access.write(path, io.BytesIO(data))

    return _seed
