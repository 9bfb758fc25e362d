"""Pytest configuration."""

import os

# Ensure test environment
os.environ.setdefault("TRACKER_DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("TRACKER_DEBUG", "true")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from tracker.config import Settings
from tracker.main import create_app
from tracker.models.database import Database


@pytest.fixture
def settings(tmp_path):
    """Isolated SQLite file per test; schema created on startup."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}",
        create_schema=True,
        debug=False,
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def client(settings):
    """TestClient running the full app lifespan against the test database."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
