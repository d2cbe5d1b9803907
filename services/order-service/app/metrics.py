"""
Prometheus metrics for Order Service.

Tracks order operations, database calls, and HTTP performance.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "order_service_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "order_service_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0),
)

# Order metrics
orders_created_total = Counter(
    "order_service_orders_created_total",
    "Total order create operations",
    ["status"],
)

orders_fetched_total = Counter(
    "order_service_orders_fetched_total",
    "Total order retrieve operations",
    ["status"],
)

order_items_per_order = Histogram(
    "order_service_items_per_order",
    "Distribution of items per created order",
    buckets=(1, 2, 3, 5, 10, 25, 50, 100),
)

# Database metrics
db_operations_total = Counter(
    "order_service_db_operations_total",
    "Total database operations",
    ["operation", "status"],
)

db_operation_duration_seconds = Histogram(
    "order_service_db_operation_duration_seconds",
    "Database operation duration in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_order_created(status: str, item_count: int = 0):
    """Track order create outcomes (success, invalid, failure)."""
    orders_created_total.labels(status=status).inc()
    if status == "success":
        order_items_per_order.observe(item_count)


def track_order_fetched(status: str):
    """Track order retrieve outcomes (success, not_found, failure)."""
    orders_fetched_total.labels(status=status).inc()


def track_db_operation(operation: str, success: bool, duration: float):
    """Track database operation metrics."""
    status = "success" if success else "failure"
    db_operations_total.labels(operation=operation, status=status).inc()
    db_operation_duration_seconds.labels(operation=operation).observe(duration)


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
