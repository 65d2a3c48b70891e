"""
FastAPI dependency injection providers.

The application factory places the quote store and the metrics adapter on
app.state; these providers hand them to route handlers. Tests can either build
an isolated app with create_app() or replace a provider through
app.dependency_overrides.

Example:
    >>> from fastapi import Depends
    >>> from quote_api.dependencies import get_quote_store
    >>>
    >>> @router.get("/quotes")
    >>> def list_quotes(store: QuoteStore = Depends(get_quote_store)):
    ...     return {"count": len(store)}
"""

from __future__ import annotations

from fastapi import Request

from quote_api.metrics import HTTPMetrics
from quote_api.services.quote_store import QuoteStore


def get_quote_store(request: Request) -> QuoteStore:
    """
    Provide the application's quote store.

    Args:
        request: Current request (gives access to app.state)

    Returns:
        QuoteStore: Store loaded by the application factory
    """
    return request.app.state.quote_store


def get_http_metrics(request: Request) -> HTTPMetrics:
    """
    Provide the application's metrics adapter.

    Args:
        request: Current request (gives access to app.state)

    Returns:
        HTTPMetrics: Metrics adapter bound to the application's registry
    """
    return request.app.state.http_metrics


def get_request_id(request: Request) -> str:
    """Return the ID assigned by RequestIDMiddleware, or an empty string outside the pipeline."""
    return getattr(request.state, "request_id", "")
