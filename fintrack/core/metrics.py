"""Prometheus metrics for the FinTrack service.

Metrics are organized into two categories:

Business Metrics:
- fintrack_transactions_created_total: Transactions recorded by type
- fintrack_transactions_deleted_total: Transactions removed
- fintrack_exports_total: Exports produced by format
- fintrack_exports_empty_total: Export requests with nothing to export

Technical Metrics:
- fintrack_dashboard_recompute_seconds: Filter/aggregate/render pass latency
- fintrack_store_fallback_total: Switches to degraded local mode
- fintrack_store_degraded: 1 while running in degraded mode
- fintrack_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

transactions_created = Counter(
    "fintrack_transactions_created_total",
    "Total number of transactions recorded",
    ["type"],  # expense, income
)

transactions_deleted = Counter(
    "fintrack_transactions_deleted_total",
    "Total number of transactions deleted",
)

exports_total = Counter(
    "fintrack_exports_total",
    "Total number of exports produced",
    ["format"],  # csv, json, pdf
)

exports_empty = Counter(
    "fintrack_exports_empty_total",
    "Export requests for a window without transactions",
    ["format"],
)


# =============================================================================
# Technical Metrics
# =============================================================================

dashboard_recompute_latency = Histogram(
    "fintrack_dashboard_recompute_seconds",
    "Latency of one filter/aggregate/render pass in seconds",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5],
)

store_fallbacks = Counter(
    "fintrack_store_fallback_total",
    "Total number of switches to degraded local mode",
)

store_degraded = Gauge(
    "fintrack_store_degraded",
    "1 when the service runs on local storage, 0 otherwise",
)

http_requests_total = Counter(
    "fintrack_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "fintrack_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_transaction_created(transaction_type: str) -> None:
    """Record a newly stored transaction."""
    transactions_created.labels(type=transaction_type).inc()


def record_transaction_deleted() -> None:
    """Record a deleted transaction."""
    transactions_deleted.inc()


def record_export(export_format: str) -> None:
    """Record a produced export."""
    exports_total.labels(format=export_format).inc()


def record_empty_export(export_format: str) -> None:
    """Record an export request that had nothing to export."""
    exports_empty.labels(format=export_format).inc()


def record_store_fallback() -> None:
    """Record a switch to degraded local mode."""
    store_fallbacks.inc()
    store_degraded.set(1)


@contextmanager
def track_dashboard_latency() -> Generator[None, None, None]:
    """Context manager to track one dashboard recompute pass."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        dashboard_recompute_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
