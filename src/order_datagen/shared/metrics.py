"""Prometheus metrics for order generation and the orders API.

Counter names omit the ``_total`` suffix; the client library appends it.
"""

from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _get_or_create_metric(metric_class, name: str, doc: str, labelnames=None, **kwargs):
    """Get existing metric or create new one to avoid duplication errors in tests."""
    # Check if already exists
    for collector in list(REGISTRY._collector_to_names.keys()):
        if hasattr(collector, "_name") and collector._name == name:
            return collector
    # Create new
    try:
        if labelnames is not None:
            kwargs["labelnames"] = labelnames
        return metric_class(name, doc, registry=REGISTRY, **kwargs)
    except ValueError as e:
        if "Duplicated timeseries" in str(e):
            # Race condition - try to find it again
            for collector in list(REGISTRY._collector_to_names.keys()):
                if hasattr(collector, "_name") and collector._name == name:
                    return collector
        raise


# Generation metrics
orders_generated_total = _get_or_create_metric(
    Counter,
    "order_datagen_orders_generated",
    "Total number of orders generated",
)

line_items_generated_total = _get_or_create_metric(
    Counter,
    "order_datagen_line_items_generated",
    "Total number of order line items generated",
)

days_generated_total = _get_or_create_metric(
    Counter,
    "order_datagen_days_generated",
    "Total number of calendar days processed by the generator",
)

generation_duration_seconds = _get_or_create_metric(
    Histogram,
    "order_datagen_generation_duration_seconds",
    "Time taken to generate orders for one request",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Query cache metrics
cache_requests_total = _get_or_create_metric(
    Counter,
    "order_datagen_cache_requests",
    "Orders query cache lookups",
    ["result"],
)

cache_entries = _get_or_create_metric(
    Gauge,
    "order_datagen_cache_entries",
    "Number of order result sets currently cached",
)

# API metrics
api_errors_total = _get_or_create_metric(
    Counter,
    "order_datagen_api_errors",
    "API requests that ended in an error response",
    ["error_type"],
)
