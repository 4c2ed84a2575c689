"""Test fixtures for the Shortlink API test suite."""

import os
import tempfile
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables BEFORE importing app modules
_test_dir = tempfile.mkdtemp(prefix="shortlink-test-")
os.environ.update({
    "DATABASE_URL": f"sqlite+aiosqlite:///{_test_dir}/shortlink_test.db",
    "DEBUG": "false",
    "SENTRY_DSN": "",
    "OTLP_ENDPOINT": "",
})

from app.core.database import async_session_factory, close_db, drop_db, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.link import LinkRegistry  # noqa: E402


class FakeClock:
    """Deterministic clock; returns the same instant until advanced."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 10, 30, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
async def _tables() -> AsyncGenerator[None, None]:
    """Fresh tables for every test; the engine is disposed on the test's loop."""
    await init_db()
    yield
    await drop_db()
    await close_db()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> LinkRegistry:
    """Registry bound to the test database with a controllable clock."""
    return LinkRegistry(async_session_factory, clock=clock)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
