"""
FastAPI dependencies for the order data generator.

This module holds the process-wide configuration and orders cache and
exposes them to route handlers through ``Depends``.
"""

import logging
from datetime import date

from fastapi import Depends

from ..config.models import DashboardConfig
from ..config.settings import load_config_with_fallback
from ..generators.order_generator import generate_orders
from .cache import OrdersQueryCache
from .exceptions import InvalidDateRangeError
from .models import Order, OrderFilters

logger = logging.getLogger(__name__)


# Global instances (initialized on startup or first use)
_config: DashboardConfig | None = None
_orders_cache: OrdersQueryCache | None = None


# ================================
# CONFIGURATION DEPENDENCIES
# ================================


async def get_config() -> DashboardConfig:
    """Get the current service configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config_with_fallback()
    return _config


async def update_config(new_config: DashboardConfig) -> None:
    """Replace the global configuration and rebuild the orders cache."""
    global _config, _orders_cache
    _config = new_config
    _orders_cache = _build_cache(new_config)


def reset_dependencies() -> None:
    """Forget the loaded configuration and cache (used by tests)."""
    global _config, _orders_cache
    _config = None
    _orders_cache = None


def _build_cache(config: DashboardConfig) -> OrdersQueryCache | None:
    if not config.cache.enabled:
        logger.info("Orders query cache disabled")
        return None
    return OrdersQueryCache(
        max_entries=config.cache.max_entries, ttl_seconds=config.cache.ttl_seconds
    )


# ================================
# ORDERS DEPENDENCIES
# ================================


async def get_orders_cache(
    config: DashboardConfig = Depends(get_config),
) -> OrdersQueryCache | None:
    """Get the orders cache instance, or None when caching is disabled."""
    global _orders_cache
    if _orders_cache is None and config.cache.enabled:
        _orders_cache = _build_cache(config)
    return _orders_cache


def check_range_limit(start: date, end: date, config: DashboardConfig) -> None:
    """
    Enforce the configured maximum request span.

    Inverted ranges are allowed through; they generate no orders.
    """
    span_days = (end - start).days + 1
    if span_days > config.api.max_range_days:
        raise InvalidDateRangeError(start, end, config.api.max_range_days)


def fetch_orders(
    start: date,
    end: date,
    filters: OrderFilters,
    cache: OrdersQueryCache | None,
) -> list[Order]:
    """Fetch orders through the cache when one is configured."""
    if cache is None:
        return generate_orders(start, end, filters)
    return cache.get_orders(start, end, filters)
