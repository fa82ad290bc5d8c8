"""
Prometheus metrics for application monitoring.
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from prometheus_client.openmetrics.exposition import generate_latest as generate_latest_openmetrics
from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import time


# Request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Shipping resolution metrics
shipping_resolutions_total = Counter(
    'shipping_resolutions_total',
    'Shipping resolutions by query mode and outcome',
    ['mode', 'outcome']
)

# Kept separate from resolutions so outages are not confused with coverage gaps
shipping_store_failures_total = Counter(
    'shipping_store_failures_total',
    'Store errors raised while resolving shipping',
    ['operation']
)


def record_resolution(mode: str, outcome: str) -> None:
    shipping_resolutions_total.labels(mode=mode, outcome=outcome).inc()


def record_store_failure(operation: str) -> None:
    shipping_store_failures_total.labels(operation=operation).inc()


def _route_template(path: str, path_params: dict) -> str:
    """Swap matched path parameter values back for their {name} placeholders."""
    segments = path.split("/")
    for name, value in path_params.items():
        for i in range(len(segments) - 1, -1, -1):
            if segments[i] == str(value):
                segments[i] = "{" + name + "}"
                break
    return "/".join(segments)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        endpoint = request.url.path

        if endpoint == "/metrics":
            return await call_next(request)

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.time() - start_time
            # Route template keeps label cardinality bounded (/shipping/rates/{rate_id})
            if request.scope.get("route") is not None:
                endpoint = _route_template(endpoint, request.scope.get("path_params") or {})

            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code
            ).inc()

            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(duration)

        return response


def get_metrics_response(openmetrics: bool = False) -> Response:
    """
    Get Prometheus metrics response.

    Args:
        openmetrics: If True, return OpenMetrics format, else Prometheus format

    Returns:
        Response with metrics data
    """
    if openmetrics:
        content = generate_latest_openmetrics()
        content_type = "application/openmetrics-text; version=1.0.0; charset=utf-8"
    else:
        content = generate_latest()
        content_type = CONTENT_TYPE_LATEST

    return Response(content=content, media_type=content_type)
