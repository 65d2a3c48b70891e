"""
ASGI middleware for request tracing, observability and response hardening.

This module provides the request pipeline that wraps every route:
request ID assignment, structured start/completion logs with Prometheus
metrics, security headers and JSON bodies for unhandled errors.

Pipeline order (outermost first):
    RequestIDMiddleware -> ObservabilityMiddleware -> SecurityHeadersMiddleware
    -> ErrorResponseMiddleware -> router
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Awaitable, Callable, MutableMapping

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from quote_api.metrics import HTTPMetrics

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "0",
}

# Headers that advertise the server implementation
FINGERPRINT_HEADERS = ("X-Powered-By", "Server")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request IDs to each HTTP request.

    This middleware generates a UUID for each incoming request and:
    1. Stores it in request.state.request_id for access in route handlers
    2. Adds it to the response as X-Request-ID header for client correlation
    3. Makes it available to the observability middleware for log correlation

    Client-supplied X-Request-ID headers are ignored; the ID is always
    generated here so it is guaranteed to be a UUID v4.

    Example:
        >>> # In a route handler
        >>> @router.get("/quote")
        >>> def random_quote(request: Request):
        ...     return {"requestId": request.state.request_id}
        >>>
        >>> # Response headers will include:
        >>> # X-Request-ID: 550e8400-e29b-41d4-a716-446655440000
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """
        Process each request by adding a unique request ID.

        Args:
            request: Incoming request
            call_next: Next middleware or route handler in chain

        Returns:
            Response with X-Request-ID header added
        """
        request_id = str(uuid.uuid4())

        # request.state is backed by scope["state"], which inner ASGI middleware share
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response


def resolve_route_label(scope: Scope) -> str:
    """
    Pick the metrics label for a request.

    Returns the path template of the route that handled the request (e.g.
    "/quotes/{quote_id}") so per-ID paths share one series. Requests the
    router did not match, including method mismatches, fall back to the raw path.

    Args:
        scope: ASGI scope after routing

    Returns:
        Route template or raw request path
    """
    route = scope.get("route")
    route_path = getattr(route, "path", None)
    methods = getattr(route, "methods", None) or ()
    if route_path and scope.get("method") in methods:
        return str(route_path)
    return str(scope.get("path", ""))


class ObservabilityMiddleware:
    """
    Structured request logging and HTTP metrics.

    Logs a request_start event as soon as the request enters the pipeline and
    registers a completion hook on the response: when the final body chunk has
    been handed to the server, the hook records the counter and histogram
    samples and logs a request_complete event. The hook fires at most once per
    request whatever the status code. If the response never finishes (the
    client disconnects mid-stream, or an exception escapes before any response
    is sent) nothing is recorded for that request.

    Args:
        app: Next ASGI application in the chain
        metrics: Registry adapter the samples are recorded on
    """

    def __init__(self, app: ASGIApp, metrics: HTTPMetrics) -> None:
        self.app = app
        self.metrics = metrics

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state: MutableMapping[str, Any] = scope.setdefault("state", {})
        request_id = state.get("request_id")
        method = scope["method"]
        path = scope["path"]
        logger = structlog.get_logger("quote_api.access")

        start = time.perf_counter()
        logger.info("request_start", request_id=request_id, method=method, path=path)

        status_code = 500
        completed = False

        def on_complete() -> None:
            duration = time.perf_counter() - start
            route = resolve_route_label(scope)

            self.metrics.observe_request(method, route, status_code, duration)

            logger.info(
                "request_complete",
                request_id=request_id,
                method=method,
                path=path,
                route=route,
                status_code=status_code,
                duration_ms=round(duration * 1000.0, 2),
            )

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, completed

            if message["type"] == "http.response.start":
                status_code = int(message["status"])

            await send(message)

            if (
                message["type"] == "http.response.body"
                and not message.get("more_body", False)
                and not completed
            ):
                completed = True
                on_complete()

        await self.app(scope, receive, send_wrapper)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds basic hardening headers to every response.

    Sets X-Content-Type-Options, X-Frame-Options and X-XSS-Protection, and
    removes headers that identify the framework or server software.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        for name in FINGERPRINT_HEADERS:
            if name in response.headers:
                del response.headers[name]

        return response


class ErrorResponseMiddleware:
    """
    Turns exceptions escaping a route handler into a JSON 500 response.

    Sits innermost so the error response still passes through the request ID,
    observability and security header layers. Exceptions raised after the
    response has started are re-raised, since no second response can be sent.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if response_started:
                raise

            request_id = scope.get("state", {}).get("request_id", "")
            structlog.get_logger("quote_api.errors").exception(
                "unhandled_exception",
                request_id=request_id,
                method=scope.get("method"),
                path=scope.get("path"),
            )
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "message": "An unexpected error occurred",
                    "requestId": request_id,
                },
            )
            await response(scope, receive, send)
