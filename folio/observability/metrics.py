from __future__ import annotations

import time
from collections.abc import Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_COUNTER = Counter(
    "folio_request_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "folio_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
)
CONTACT_SUBMISSIONS = Counter(
    "folio_contact_submissions_total",
    "Contact form messages accepted",
)
STARTED_AT = Gauge(
    "folio_started_timestamp_seconds",
    "Unix timestamp of process start",
)

STARTED_AT.set_to_current_time()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Collect Prometheus metrics for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start
        # Label by route template so ids do not explode cardinality
        route = request.scope.get("route")
        path_template = getattr(route, "path", "unmatched")
        REQUEST_COUNTER.labels(
            request.method, path_template, response.status_code
        ).inc()
        REQUEST_LATENCY.labels(request.method, path_template).observe(duration)
        return response


def metrics_response() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
