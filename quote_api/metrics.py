"""
Prometheus metrics for HTTP request monitoring.

Metrics live on an explicit CollectorRegistry owned by an HTTPMetrics instance
instead of module-level globals, so every application (and every test) can get
its own isolated registry. The production app binds to prometheus_client's
default REGISTRY, which also carries the process and platform collectors.

Example:
    >>> from prometheus_client import CollectorRegistry
    >>> metrics = HTTPMetrics(CollectorRegistry())
    >>> metrics.observe_request("GET", "/quote", 200, 0.004)
    >>> b"http_requests_total" in metrics.render()
    True
"""

from __future__ import annotations

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REQUEST_DURATION_BUCKETS = (0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0)


class HTTPMetrics:
    """
    Request counter and latency histogram bound to one registry.

    Attributes:
        registry: Registry the collectors are registered on
        requests_total: Counter labelled by method, route and status_code
        request_duration: Histogram labelled by method and route

    prometheus_client guards every sample with its own lock, so observations
    from concurrent requests need no extra synchronization here.
    """

    CONTENT_TYPE = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status_code"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "route"],
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self.registry,
        )

    def observe_request(
        self, method: str, route: str, status_code: int, duration_seconds: float
    ) -> None:
        """
        Record one completed request.

        Args:
            method: HTTP method
            route: Route label (route template, or the raw path when unmatched)
            status_code: Final response status code
            duration_seconds: Wall-clock time from request start to response end
        """
        self.requests_total.labels(
            method=method, route=route, status_code=str(status_code)
        ).inc()
        self.request_duration.labels(method=method, route=route).observe(duration_seconds)

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)
