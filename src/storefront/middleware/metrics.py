"""Prometheus metrics middleware and catalog metrics."""
import time
from typing import Callable

from prometheus_client import Counter, Gauge, Histogram, generate_latest
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from storefront.core.config import settings


# =============================================================================
# Prometheus Metrics Definitions
# =============================================================================

# Request metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
)

# Catalog metrics
CATALOG_RELOADS = Counter(
    "catalog_reloads_total",
    "Catalog source file reloads",
)

CATALOG_LOAD_FAILURES = Counter(
    "catalog_load_failures_total",
    "Failed attempts to read or parse the catalog source",
)

CATALOG_PRODUCTS = Gauge(
    "catalog_products_loaded",
    "Number of product records in the cached catalog",
)

GUARDRAIL_FAILURES = Counter(
    "catalog_guardrail_failures_total",
    "Stored records rejected by output validation",
    ["endpoint"],
)


# =============================================================================
# Metrics Middleware
# =============================================================================

class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for all HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception:
            status_code = 500
            raise
        finally:
            ACTIVE_REQUESTS.dec()
            latency = time.perf_counter() - start_time

            endpoint = self._normalize_endpoint(request.url.path)

            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=endpoint,
                status=status_code,
            ).inc()

            REQUEST_LATENCY.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(latency)

        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Normalize endpoint path to reduce metric cardinality."""
        products = f"{settings.API_PREFIX}/products"
        if path.startswith(products):
            return products
        if path == "/health":
            return path
        return "/other"


# =============================================================================
# Metrics Endpoint
# =============================================================================

async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics scrape endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


# =============================================================================
# Helper Functions for Manual Metric Recording
# =============================================================================

def record_catalog_reload(product_count: int) -> None:
    CATALOG_RELOADS.inc()
    CATALOG_PRODUCTS.set(product_count)


def record_catalog_load_failure() -> None:
    CATALOG_LOAD_FAILURES.inc()


def record_guardrail_failure(endpoint: str) -> None:
    GUARDRAIL_FAILURES.labels(endpoint=endpoint).inc()
