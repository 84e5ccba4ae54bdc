import logging

from fastapi.testclient import TestClient

from db.connection import get_db
from tests.conftest import TEST_PHONE
from utils.logging import NOISY_LOGGERS, configure_logging


def _broken_db():
    raise RuntimeError("connection pool exhausted")


def test_unhandled_dependency_error_returns_generic_500(app):
    app.dependency_overrides[get_db] = _broken_db
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/user/data", params={"phone": TEST_PHONE})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}


def test_health_reports_database_state(app, client):
    assert client.get("/health").json() == {"status": "ok", "database": True}

    app.state.database.is_connected = False
    assert client.get("/health").json() == {"status": "ok", "database": False}


def test_configure_logging_quiets_driver_loggers():
    configure_logging("DEBUG")
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
