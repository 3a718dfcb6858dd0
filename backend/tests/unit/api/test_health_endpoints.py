"""Endpoint tests for health probes."""

from dataclasses import replace

from fastapi.testclient import TestClient

from presida.adapters.health.fake import FakeHealthProbe
from presida.api import deps
from presida.main import app


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_liveness(client):
    assert client.get("/health/live").json() == {"status": "alive"}


def test_readiness_up(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["checks"]["postgres"]["status"] == "up"


def test_readiness_down(test_container):
    failing = replace(test_container, db_probe=FakeHealthProbe(error=ConnectionRefusedError()))
    app.dependency_overrides[deps.get_container] = lambda: failing
    try:
        response = TestClient(app).get("/health/ready")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "not_ready"
    assert body["checks"]["postgres"] == {
        "status": "down",
        "latency_ms": None,
        "error": "ConnectionRefusedError",
    }


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"
