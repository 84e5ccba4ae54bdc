"""Shared fixtures: an app wired to an in-memory MongoDB and a fresh response cache."""
import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from core.config import Settings
from main import create_app
from utils.cache import ResponseCache

TEST_PHONE = "+375291112233"
TEST_PASSWORD = "secret-pass"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(
        mongo_db_name="mobile_operator_test",
        cache_ttl_seconds=60,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["mobile_operator_test"]


@pytest.fixture
def app(settings, mongo_db, clock):
    app = create_app(settings)
    app.state.database.db = mongo_db
    app.state.database.is_connected = True
    app.state.response_cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds, clock=clock)
    return app


@pytest.fixture
def client(app):
    # No context manager: the lifespan would try to reach a real MongoDB
    return TestClient(app)


@pytest.fixture
def registered_user(client):
    response = client.post(
        "/api/register",
        json={"fio": "Ivan Petrov", "phone": TEST_PHONE, "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    return response.json()["user"]


@pytest.fixture
def run():
    """Run a coroutine against the mock database from a synchronous test."""
    return asyncio.run
