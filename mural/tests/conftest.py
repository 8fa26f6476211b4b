"""
Pytest configuration and fixtures for Mural tests.

Every test gets its own empty data directory.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from mural.main import app
from mural.store import init_store


@pytest.fixture(autouse=True)
def data_dir(tmp_path_factory, monkeypatch):
    """Point MURAL_DATA_DIR at a fresh temp dir and create empty collections."""
    path = tmp_path_factory.mktemp("data")
    monkeypatch.setenv("MURAL_DATA_DIR", str(path))
    init_store()
    return path


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
