"""
Project Canvas Backend - Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before the first canvas_journal import,
       so the settings singleton and the engine point at a throwaway SQLite
       file. Every test gets freshly created tables and a fresh app.

Fixture Hierarchy:
    Function-scoped:
    ├── database:        drops and recreates every table, disposes the pool after
    ├── db_session:      AsyncSession on the test database
    ├── client:          HTTPX AsyncClient over ASGITransport (fresh create_app())
    ├── admin_headers:   valid bearer header for /api/admin
    └── sample_document: payload document with three enabled and one disabled hotspot
"""

import copy
import os
import tempfile

# Override settings for testing BEFORE any app imports
_TEST_DB_DIR = tempfile.mkdtemp(prefix="canvas_journal_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["ADMIN_TOKEN"] = "test-admin-token"
os.environ["CORS_ORIGIN"] = "http://localhost:8000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from canvas_journal.database import Base, async_session_factory, engine  # noqa: E402
import canvas_journal.models  # noqa: E402,F401

ADMIN_TOKEN = "test-admin-token"

SAMPLE_DOCUMENT = {
    "canvas": {"width": 2000, "height": 1000},
    "settings": {"zoomOnClick": 2, "minZoom": 0.25, "maxZoom": 4},
    "hotspots": [
        {
            "id": "a",
            "name": "Alpha",
            "region": {"x": 10, "y": 20, "width": 100, "height": 50},
            "content": {"title": "Alpha title", "description": "First", "image": ""},
            "sequence": 1,
        },
        {
            "id": "b",
            "name": "Beta",
            "type": "image",
            "region": {"x": 200, "y": 20, "width": 80, "height": 80},
            "content": {"title": "Beta", "description": "", "image": "img/b.jpg", "video": ""},
            "sequence": 2,
        },
        {
            "id": "c",
            "name": "Gamma",
            "type": "video",
            "region": {"x": 400.5, "y": 300, "width": 120, "height": 60},
            "content": {"title": "Gamma", "video": "https://youtu.be/abc123"},
            "sequence": 3,
        },
        {
            "id": "d",
            "name": "Hidden",
            "enabled": False,
            "region": {"x": 0, "y": 0, "width": 40, "height": 40},
            "content": {"title": "Hidden", "description": "draft"},
            "sequence": 4,
        },
    ],
}


@pytest_asyncio.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    """
    HTTPX AsyncClient talking to a freshly built app.

    A new app per test means new middleware instances, so rate-limit
    windows never leak between tests.
    """
    from canvas_journal.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


class RecordingViewport:
    """Viewport stand-in that records every call in order."""

    def __init__(self):
        self.calls = []

    def zoom_to(self, x, y, scale):
        self.calls.append(("zoom_to", x, y, scale))

    def move_to(self, x, y):
        self.calls.append(("move_to", x, y))

    def pause(self):
        self.calls.append(("pause",))

    def resume(self):
        self.calls.append(("resume",))


@pytest.fixture
def viewport():
    return RecordingViewport()
