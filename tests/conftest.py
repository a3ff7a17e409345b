"""Shared fixtures for Short Links Service tests."""

from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from shortlinks.main import app
from shortlinks.core.config import Settings, get_settings
from shortlinks.core.database import Database, get_db


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = Database(":memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def make_client(test_db):
    """Build test clients with the database and extra dependencies overridden."""

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    # Skip the default lifespan, which would open the global database
    original_lifespan = app.router.lifespan_context
    app.router.lifespan_context = test_lifespan

    def _make(overrides=None):
        app.dependency_overrides[get_db] = lambda: test_db
        app.dependency_overrides.update(overrides or {})
        return TestClient(app, raise_server_exceptions=False)

    yield _make

    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    """Create a test client backed by the in-memory database."""
    with make_client() as client:
        yield client


@pytest.fixture
def auth_client(make_client):
    """Create a test client with Basic auth enabled."""
    auth_settings = Settings(auth_username="myuser", auth_password="mypass")
    with make_client({get_settings: lambda: auth_settings}) as client:
        yield client
