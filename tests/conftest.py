"""
Pytest configuration and fixtures for the poster gallery tests
"""

import os

import pytest
from httpx import AsyncClient, ASGITransport

from app.config import settings
from app.core.rate_limit import limiter
from app.db import init_db, close_db
from app.main import app
from helpers import signup

TEST_DB_PATH = "./.test_db.sqlite3"


def _remove_test_db():
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture(scope="session", autouse=True)
def _no_rate_limits():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def uploads_dir(tmp_path, monkeypatch):
    root = tmp_path / "uploads"
    root.mkdir()
    monkeypatch.setattr(settings, "UPLOADS_DIR", str(root))
    return root


@pytest.fixture(scope="function")
async def db_setup():
    """Initialize a fresh SQLite test database for each test."""
    _remove_test_db()
    await init_db()
    try:
        yield
    finally:
        await close_db()
        _remove_test_db()


@pytest.fixture
async def client(db_setup, uploads_dir):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_headers(client):
    return await signup(client, "alice@example.com", "Alice")
