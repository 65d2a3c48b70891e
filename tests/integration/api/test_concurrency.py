"""
Integration tests for concurrent requests through the middleware pipeline.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

CONCURRENT_REQUESTS = 25


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.integration
@pytest.mark.asyncio
async def test_concurrent_requests_get_distinct_request_ids(api_client: AsyncClient) -> None:
    """Test that in-flight requests never share a request ID."""
    responses = await asyncio.gather(*(api_client.get("/quote") for _ in range(CONCURRENT_REQUESTS)))

    request_ids = {response.headers["X-Request-ID"] for response in responses}
    assert len(request_ids) == CONCURRENT_REQUESTS
    for response in responses:
        assert response.status_code == 200
        assert response.json()["requestId"] == response.headers["X-Request-ID"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_concurrent_requests_are_all_counted(api_client: AsyncClient, app: FastAPI) -> None:
    """Test that the request counter equals the number of concurrent requests."""
    await asyncio.gather(*(api_client.get("/quotes") for _ in range(CONCURRENT_REQUESTS)))

    registry = app.state.http_metrics.registry
    labels = {"method": "GET", "route": "/quotes", "status_code": "200"}
    assert registry.get_sample_value("http_requests_total", labels) == CONCURRENT_REQUESTS
    assert (
        registry.get_sample_value("http_request_duration_seconds_count", {"method": "GET", "route": "/quotes"})
        == CONCURRENT_REQUESTS
    )
