"""Tests for app-level endpoints and error rendering."""

from fastapi.testclient import TestClient

from todo_api.database import get_db
from todo_api.main import app


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Todo API"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_store_failure_is_generic_500():
    def broken_get_db():
        raise RuntimeError("database is down")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_get_db
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/auth/login", json={"username": "alice", "password": "pw123456"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "database is down" not in response.text
