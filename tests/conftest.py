"""Pytest configuration and fixtures."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from exercise_tracker_api.app.core.config import Settings
from exercise_tracker_api.app.core.db import Database
from exercise_tracker_api.app.main import create_app


@pytest.fixture
def settings():
    """Settings pointing at a private in-memory database."""
    return Settings(database_url=":memory:", default_log_limit=500)


@pytest.fixture
def client(settings):
    """Test client; entering the context runs the app lifespan."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db():
    """A connected in-memory database handle for service tests."""
    database = Database(":memory:")
    assert database.connect()
    yield database
    database.close()


@pytest.fixture
def run():
    """Run a service coroutine to completion."""
    return asyncio.run


@pytest.fixture
def user(client):
    """A registered user, as returned by the API."""
    response = client.post("/api/users", data={"username": "fcc_test"})
    return response.json()
