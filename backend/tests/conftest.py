"""
Pytest configuration and fixtures for Inspector backend tests.

Route tests run against the in-memory component store. Postgres-backed
repo tests run only when DATABASE_URL points at a migrated test database.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import app  # noqa: E402
from backend.middleware.rate_limit import rate_limiter  # noqa: E402
from backend.repos.component_repo import MemoryComponentRepo, get_component_repo  # noqa: E402


@pytest.fixture
def memory_repo():
    """Fresh in-memory store per test."""
    return MemoryComponentRepo()


@pytest_asyncio.fixture
async def async_client(memory_repo):
    """Async HTTP client against the ASGI app, wired to memory_repo."""
    app.dependency_overrides[get_component_repo] = lambda: memory_repo
    rate_limiter.reset()
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def heading_component():
    return "<div><h1>Hello World</h1><p>Intro</p></div>"
