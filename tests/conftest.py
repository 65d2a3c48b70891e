"""
Shared fixtures: every test gets its own application and metrics registry.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from quote_api.main import create_app
from quote_api.metrics import HTTPMetrics


@pytest.fixture
def metrics() -> HTTPMetrics:
    """Metrics adapter on a private registry."""
    return HTTPMetrics()


@pytest.fixture
def app(metrics: HTTPMetrics) -> FastAPI:
    """Application wired to the test's metrics registry."""
    return create_app(metrics=metrics)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """FastAPI test client."""
    return TestClient(app)
