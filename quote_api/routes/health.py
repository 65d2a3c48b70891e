"""
Service metadata and health endpoint.

The root path doubles as a liveness probe: the service holds no external
dependencies, so it is healthy whenever it can answer.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from quote_api.config import SERVICE_NAME, SERVICE_VERSION
from quote_api.dependencies import get_request_id

router = APIRouter()

ENDPOINTS = {
    "GET /": "Health check (this endpoint)",
    "GET /quote": "Get a random quote",
    "GET /quotes": "Get all quotes",
    "GET /quotes/:id": "Get quote by ID",
    "GET /metrics": "Prometheus metrics",
}


@router.get("/")
def health_check(request_id: str = Depends(get_request_id)) -> dict[str, Any]:
    """
    Liveness probe and service metadata.

    Returns:
        dict: Service name, status, version, request ID and available endpoints

    Example:
        >>> GET /
        {"service": "Quote Generator API", "status": "healthy", "version": "1.0.0", ...}
    """
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "version": SERVICE_VERSION,
        "requestId": request_id,
        "endpoints": ENDPOINTS,
    }
