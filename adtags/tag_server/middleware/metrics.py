"""
Prometheus metrics middleware for monitoring.

Provides:
- Request latency histograms
- Request counters by endpoint
- Active request gauge
- Tag metrics (placeholders, defined units, size mappings, footer tags)
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response as StarletteResponse

from adtags.common.logger import get_logger

logger = get_logger(__name__)

# =============================================================================
# Prometheus Metrics Definitions
# =============================================================================

HTTP_REQUEST_TOTAL = Counter(
    "adtags_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "adtags_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "adtags_http_requests_in_progress",
    "HTTP requests currently in progress",
    ["method", "endpoint"],
)

PLACEHOLDERS_TOTAL = Counter(
    "adtags_placeholders_total",
    "Ad placeholders registered",
    ["display"],
)

AD_UNITS_DEFINED_TOTAL = Counter(
    "adtags_ad_units_defined_total",
    "Ad units defined without a generated container",
)

SIZE_MAPPINGS_TOTAL = Counter(
    "adtags_size_mappings_total",
    "Size mappings added",
)

FOOTER_TAGS_TOTAL = Counter(
    "adtags_footer_tags_total",
    "Footer tags rendered",
    ["mode"],
)

FOOTER_TAG_SLOTS = Histogram(
    "adtags_footer_tag_slots",
    "Ad units per rendered footer tag",
    buckets=(0, 1, 2, 4, 8, 16, 32),
)


# =============================================================================
# Metrics Middleware
# =============================================================================

class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware that collects Prometheus metrics for all HTTP requests.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method
        endpoint = request.url.path

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()

        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            logger.error(f"Request error: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time

            HTTP_REQUEST_TOTAL.labels(
                method=method,
                endpoint=endpoint,
                status=str(status_code),
            ).inc()

            HTTP_REQUEST_DURATION.labels(
                method=method,
                endpoint=endpoint,
            ).observe(duration)

            HTTP_REQUESTS_IN_PROGRESS.labels(
                method=method,
                endpoint=endpoint,
            ).dec()


# =============================================================================
# Metrics Endpoint
# =============================================================================

async def metrics_endpoint() -> StarletteResponse:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    return StarletteResponse(
        content=generate_latest(),
        media_type="text/plain; charset=utf-8",
    )


# =============================================================================
# Helper Functions for Recording Tag Metrics
# =============================================================================

def record_placeholder(display: bool) -> None:
    """Record a registered placeholder."""
    PLACEHOLDERS_TOTAL.labels(display=str(display).lower()).inc()


def record_ad_unit_defined() -> None:
    """Record an ad unit defined against an existing container."""
    AD_UNITS_DEFINED_TOTAL.inc()


def record_size_mapping() -> None:
    """Record an added size mapping."""
    SIZE_MAPPINGS_TOTAL.inc()


def record_footer_tag(has_network: bool, slots: int) -> None:
    """Record a rendered footer tag."""
    FOOTER_TAGS_TOTAL.labels(mode="ads" if has_network else "hidden").inc()
    FOOTER_TAG_SLOTS.observe(slots)
