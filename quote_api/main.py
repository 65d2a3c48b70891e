# quote_api/main.py

from __future__ import annotations

from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import REGISTRY
from starlette.exceptions import HTTPException as StarletteHTTPException

from quote_api.config import HOST, PORT, SERVICE_NAME, SERVICE_VERSION
from quote_api.logging_config import setup_logging
from quote_api.metrics import HTTPMetrics
from quote_api.middleware import (
    ErrorResponseMiddleware,
    ObservabilityMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from quote_api.routes.health import ENDPOINTS
from quote_api.routes.health import router as health_router
from quote_api.routes.metrics import router as metrics_router
from quote_api.routes.quotes import router as quotes_router
from quote_api.services.quote_store import DEFAULT_QUOTES, QuoteStore

logger = structlog.get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Render HTTP errors as structured JSON.

    Unknown paths and unsupported methods both become the catch-all 404.
    """
    request_id = getattr(request.state, "request_id", "")

    if exc.status_code in (404, 405):
        logger.info(
            "route_not_found",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": f"Route {request.method} {request.url.path} does not exist",
                "requestId": request_id,
                "availableEndpoints": list(ENDPOINTS),
            },
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail), "requestId": request_id},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    store: Optional[QuoteStore] = None,
    metrics: Optional[HTTPMetrics] = None,
) -> FastAPI:
    """
    Build the application with its quote store and metrics registry.

    Args:
        store: Quote collection to serve (defaults to the built-in quotes)
        metrics: Metrics adapter (defaults to one with a fresh, private registry)

    Returns:
        FastAPI: Configured application
    """
    store = store if store is not None else QuoteStore(DEFAULT_QUOTES)
    metrics = metrics if metrics is not None else HTTPMetrics()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Serves inspirational quotes from a fixed in-memory collection",
        version=SERVICE_VERSION,
        redirect_slashes=False,
    )
    app.state.quote_store = store
    app.state.http_metrics = metrics

    # Middleware added last runs first
    app.add_middleware(ErrorResponseMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ObservabilityMiddleware, metrics=metrics)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Register routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(quotes_router, tags=["Quotes"])
    app.include_router(metrics_router, tags=["Metrics"])

    return app


# Initialize structured logging
setup_logging()

app = create_app(metrics=HTTPMetrics(REGISTRY))


def run() -> None:
    """Start the HTTP server on HOST:PORT."""
    base_url = f"http://localhost:{PORT}"
    structlog.get_logger("quote_api.server").info(
        "server_start",
        host=HOST,
        port=PORT,
        health_url=f"{base_url}/",
        quote_url=f"{base_url}/quote",
        quotes_url=f"{base_url}/quotes",
    )

    uvicorn.run(app, host=HOST, port=PORT, server_header=False, log_config=None)
