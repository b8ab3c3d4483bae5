"""
Name: Observability Endpoint Tests

Responsibilities:
  - /healthz and /readyz report store status
  - X-Request-Id propagation into responses and error bodies
  - /metrics exposure and optional admin guard
"""

import pytest
from fastapi.testclient import TestClient

from storefront.api.main import create_app
from storefront.identity.users import UserRole

pytestmark = pytest.mark.unit


def test_healthz_memory_store(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["db"] == "connected"
    assert body["request_id"]


def test_readyz(client):
    response = client.get("/readyz")

    assert response.status_code == 200
    assert response.json()["ok"] is True


def test_request_id_is_echoed(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert response.json()["request_id"] == "req-123"


def test_error_body_carries_request_id(client):
    response = client.get("/api/auth/me", headers={"X-Request-Id": "req-err"})

    assert response.status_code == 401
    assert {"request_id": "req-err"} in response.json()["errors"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert response.json()["success"] is False


def test_metrics_public_by_default(client):
    client.get("/api/auth/me")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "storefront_requests_total" in response.text
    assert "storefront_auth_failures_total" in response.text


def test_metrics_require_admin(monkeypatch, make_user, auth_headers):
    monkeypatch.setenv("METRICS_REQUIRE_ADMIN", "true")
    client = TestClient(create_app(), raise_server_exceptions=False)

    anonymous = client.get("/metrics")
    customer = client.get("/metrics", headers=auth_headers(make_user()))
    admin = client.get(
        "/metrics", headers=auth_headers(make_user(role=UserRole.ADMIN))
    )

    assert anonymous.status_code == 401
    assert customer.status_code == 403
    assert admin.status_code == 200
