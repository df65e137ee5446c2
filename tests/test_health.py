"""Tests for health endpoints and application-wide behavior."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from coursely.config import get_settings


def test_liveness(client: TestClient) -> None:
    """Test the liveness endpoint."""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness(client: TestClient) -> None:
    """Readiness reports the database as reachable."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["database"] is True
    assert data["environment"] == "testing"


def test_readiness_without_database(client: TestClient) -> None:
    """Readiness answers 503 when no engine is available."""
    engine = client.app.state.engine
    client.app.state.engine = None
    try:
        response = client.get("/health/ready")
    finally:
        client.app.state.engine = engine
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"


def test_health(client: TestClient) -> None:
    """Test the general health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app_name"] == "coursely"
    assert "version" in data
    assert "environment" in data


def test_root(client: TestClient) -> None:
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "coursely" in data["message"]
    assert "version" in data


def test_request_id_header_generated(client: TestClient) -> None:
    response = client.get("/courses")
    assert response.headers.get("X-Request-ID")


def test_request_id_header_echoed(client: TestClient) -> None:
    response = client.get("/courses", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_error_body_shape(client: TestClient) -> None:
    """Errors share one body shape carrying the request id."""
    response = client.get("/no-such-route", headers={"X-Request-ID": "req-404"})
    assert response.status_code == 404
    assert response.json() == {
        "error": True,
        "message": "Not Found",
        "status_code": 404,
        "request_id": "req-404",
    }


def test_malformed_body_is_400(client: TestClient) -> None:
    """Type errors in request bodies are reported as 400 with field details."""
    response = client.post("/enroll", json={"userId": "abc", "courseId": 1})
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Validation error"
    assert any("userId" in detail["field"] for detail in data["details"])


def test_bad_catalog_file_keeps_api_up(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An unreadable seed catalog is logged; the database and services stay up."""
    bad_catalog = tmp_path / "broken.json"
    bad_catalog.write_text("[{not json", encoding="utf-8")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'bad-seed.db'}")
    monkeypatch.setenv("CATALOG_SEED_PATH", str(bad_catalog))
    get_settings.cache_clear()

    from coursely.main import create_app

    try:
        with TestClient(create_app()) as test_client:
            assert test_client.get("/health/ready").status_code == 200
            response = test_client.get("/courses")
            assert response.status_code == 200
            assert response.json() == []
    finally:
        get_settings.cache_clear()
