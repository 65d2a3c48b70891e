"""
Unit tests for metrics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from quote_api.metrics import HTTPMetrics


@pytest.mark.unit
def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    """Test that /metrics endpoint returns Prometheus text format."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]


@pytest.mark.unit
def test_metrics_endpoint_contains_http_metrics_after_request(client: TestClient) -> None:
    """Test that request metrics appear once a request has completed."""
    client.get("/quote")

    content = client.get("/metrics").text

    assert "http_requests_total" in content
    assert "http_request_duration_seconds" in content
    assert 'route="/quote"' in content


@pytest.mark.unit
def test_metrics_endpoint_includes_help_and_type_metadata(client: TestClient) -> None:
    """Test that metrics include Prometheus HELP and TYPE metadata."""
    client.get("/")

    content = client.get("/metrics").text

    assert "# HELP" in content
    assert "# TYPE" in content
    assert "counter" in content
    assert "histogram" in content


@pytest.mark.unit
def test_metrics_endpoint_reads_injected_registry(client: TestClient, metrics: HTTPMetrics) -> None:
    """Test that /metrics renders the registry the app was built with."""
    metrics.observe_request("GET", "/synthetic", 200, 0.2)

    content = client.get("/metrics").text

    assert 'route="/synthetic"' in content
