"""
Prometheus metrics endpoint for monitoring and observability.

This module provides a FastAPI route that exposes the application's metrics
registry in the standard text-based format for scraping by Prometheus servers.

Example:
    GET /metrics

    Response:
        # HELP http_requests_total Total number of HTTP requests
        # TYPE http_requests_total counter
        http_requests_total{method="GET",route="/quote",status_code="200"} 3.0
        ...
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from quote_api.dependencies import get_http_metrics
from quote_api.metrics import HTTPMetrics

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics(http_metrics: HTTPMetrics = Depends(get_http_metrics)) -> Response:
    """
    Prometheus metrics endpoint.

    Returns:
        Response: Current registry state with Content-Type: text/plain
    """
    return Response(content=http_metrics.render(), media_type=HTTPMetrics.CONTENT_TYPE)
