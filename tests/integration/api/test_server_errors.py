"""
Integration tests for unhandled exceptions inside route handlers.
"""

from __future__ import annotations

import re

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

UUID4_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"


@pytest.fixture
def failing_client(app: FastAPI) -> TestClient:
    """Test client for an app with a route that always raises."""

    def explode() -> dict[str, str]:
        raise RuntimeError("boom")

    app.add_api_route("/explode", explode, methods=["GET"])
    return TestClient(app)


@pytest.mark.integration
def test_unhandled_exception_returns_structured_500(failing_client: TestClient) -> None:
    """Test that a raising handler produces a JSON 500 with the request ID."""
    response = failing_client.get("/explode")

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Internal Server Error"
    assert data["message"] == "An unexpected error occurred"
    assert "boom" not in response.text
    assert re.match(UUID4_PATTERN, response.headers["X-Request-ID"])
    assert data["requestId"] == response.headers["X-Request-ID"]


@pytest.mark.integration
def test_unhandled_exception_keeps_security_headers(failing_client: TestClient) -> None:
    """Test that error responses are hardened like every other response."""
    response = failing_client.get("/explode")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"


@pytest.mark.integration
def test_unhandled_exception_is_counted(failing_client: TestClient, app: FastAPI) -> None:
    """Test that failed requests still record a metrics sample."""
    failing_client.get("/explode")

    registry = app.state.http_metrics.registry
    labels = {"method": "GET", "route": "/explode", "status_code": "500"}
    assert registry.get_sample_value("http_requests_total", labels) == 1.0
