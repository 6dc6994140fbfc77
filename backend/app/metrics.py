"""Prometheus metrics for monitoring and observability."""

from __future__ import annotations

import platform
import re
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import lru_cache

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


# ==============================================================================
# APPLICATION INFO
# ==============================================================================

app_info = Info("campus_eats", "Campus Eats API information")
app_info.info(
    {
        "version": "0.1.0",
        "service": "campus-eats-api",
        "python_version": platform.python_version(),
    }
)

# ==============================================================================
# HTTP METRICS
# ==============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "HTTP requests currently in progress",
    ["method", "endpoint"],
)

# ==============================================================================
# PLACE SEARCH METRICS
# ==============================================================================

place_searches_total = Counter(
    "place_searches_total",
    "Place searches by region and outcome",
    ["region", "outcome"],
)

place_search_results = Histogram(
    "place_search_results",
    "Number of places returned per search",
    ["region"],
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500),
)

places_written_total = Counter(
    "places_written_total",
    "Place records created or deleted",
    ["action"],
)

# ==============================================================================
# DATABASE METRICS
# ==============================================================================

db_operations_total = Counter(
    "db_operations_total",
    "Total database operations",
    ["operation", "status"],
)

db_operation_duration_seconds = Histogram(
    "db_operation_duration_seconds",
    "Database operation duration in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


@contextmanager
def track_db_operation(operation: str) -> Iterator[None]:
    """Count and time one store call; failures are counted and re-raised."""
    start_time = time.perf_counter()
    try:
        yield
    except Exception:
        db_operations_total.labels(operation=operation, status="error").inc()
        raise
    else:
        db_operations_total.labels(operation=operation, status="ok").inc()
    finally:
        db_operation_duration_seconds.labels(operation=operation).observe(
            time.perf_counter() - start_time
        )


_UUID_SEGMENT = re.compile(
    r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)
_PLACES_SEGMENT = re.compile(r"^(/v1)?/places/[^/]+")


@lru_cache(maxsize=2048)
def normalize_endpoint(path: str) -> str:
    """
    Normalize endpoint path to reduce cardinality.

    Examples:
        /v1/places/ganesha -> /v1/places/{key}
        /v1/places/3f2c...-... -> /v1/places/{key}
    """
    path = _PLACES_SEGMENT.sub(lambda m: f"{m.group(1) or ''}/places/{{key}}", path)
    path = _UUID_SEGMENT.sub("/{id}", path)
    path = re.sub(r"/\d+", "/{id}", path)
    return path


# ==============================================================================
# PROMETHEUS MIDDLEWARE
# ==============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to track HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = normalize_endpoint(request.url.path)
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.time() - start_time
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()


# ==============================================================================
# METRICS ENDPOINT
# ==============================================================================


def get_metrics() -> Response:
    """Generate Prometheus metrics response."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "PrometheusMiddleware",
    "get_metrics",
    "http_requests_total",
    "http_request_duration_seconds",
    "place_searches_total",
    "place_search_results",
    "places_written_total",
    "db_operations_total",
    "track_db_operation",
    "normalize_endpoint",
]
