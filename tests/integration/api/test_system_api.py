"""
Integration Tests for System API Endpoints
"""
import logging
import pytest
from fastapi.testclient import TestClient

from taskboard import __version__
from taskboard.main import app
from taskboard.api.dependencies import get_session_service
from taskboard.core.logger import log_manager, ListLogHandler


@pytest.fixture
def client(session_service):
    app.dependency_overrides[get_session_service] = lambda: session_service
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def buffered_logger():
    handler = ListLogHandler()
    test_logger = logging.getLogger("taskboard.tests.system")
    test_logger.setLevel(logging.INFO)
    test_logger.addHandler(handler)
    log_manager.buffer.clear()
    yield test_logger
    test_logger.removeHandler(handler)


def test_health(client):
    response = client.get("/api/system/health")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["version"] == __version__
    assert data["session"] == "UNAUTHENTICATED"
    assert data["api_base_url"]


def test_logs(client, buffered_logger):
    buffered_logger.info("first")
    buffered_logger.warning("second")

    response = client.get("/api/system/logs", params={"limit": 1})

    logs = response.json()["logs"]
    assert len(logs) == 1
    assert logs[0]["message"] == "second"
    assert logs[0]["level"] == "WARNING"


def test_logs_limit_validated(client):
    response = client.get("/api/system/logs", params={"limit": 0})
    assert response.status_code == 422


def test_log_websocket_replays_buffer(client):
    log_manager.buffer.clear()
    log_manager.add_log("first")
    log_manager.add_log("second", "ERROR")

    with client.websocket_connect("/api/system/ws/logs") as websocket:
        assert websocket.receive_json() == {"message": "first", "level": "INFO"}
        assert websocket.receive_json() == {"message": "second", "level": "ERROR"}
