"""
Memoizing cache for generated order result sets.

Generation is a pure function of (start date, end date, filters), so results
can be reused until they expire. Filters are part of the cache key: a
filtered request never reuses an unfiltered result, whose order numbers and
groupings differ from a filtered run.
"""

import logging
import threading
import time
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from cachetools import TTLCache
from pydantic import BaseModel, Field

from ..generators.order_generator import coerce_date, coerce_filters, generate_orders
from .metrics import cache_entries, cache_requests_total
from .models import Order, OrderFilters

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, tuple[frozenset[str] | None, ...]]


class CacheStats(BaseModel):
    """Model for the orders cache statistics."""

    hits: int = Field(0, ge=0)
    misses: int = Field(0, ge=0)
    size: int = Field(0, ge=0)
    max_entries: int = Field(..., gt=0)
    ttl_seconds: float = Field(..., gt=0)


class OrdersQueryCache:
    """Manager for cached order result sets."""

    def __init__(
        self,
        max_entries: int = 128,
        ttl_seconds: float = 300.0,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the orders cache.

        Args:
            max_entries: Maximum number of result sets kept at once
            ttl_seconds: Seconds a result set stays valid after insertion
            timer: Clock used for expiry
        """
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._cache: TTLCache[CacheKey, tuple[Order, ...]] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(start: date, end: date, filters: OrderFilters) -> CacheKey:
        return (start.isoformat(), end.isoformat(), filters.cache_key())

    def get_orders(
        self,
        start_date: date | datetime | str,
        end_date: date | datetime | str,
        filters: OrderFilters | Mapping[str, Any] | None = None,
    ) -> list[Order]:
        """
        Get orders for a date range, generating them on a cache miss.

        Returns:
            A new list each call; the Order objects are immutable and shared
        """
        start = coerce_date(start_date, "start_date")
        end = coerce_date(end_date, "end_date")
        order_filters = coerce_filters(filters)
        key = self.make_key(start, end, order_filters)

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._hits += 1
                cache_requests_total.labels(result="hit").inc()
                return list(cached)
            self._misses += 1
            cache_requests_total.labels(result="miss").inc()

        # Generate outside the lock; concurrent misses produce identical results
        orders = generate_orders(start, end, order_filters)

        with self._lock:
            self._cache[key] = tuple(orders)
            cache_entries.set(len(self._cache))

        logger.debug(f"Cached {len(orders)} orders for key {key[0]}..{key[1]}")
        return orders

    def clear(self) -> int:
        """Drop every cached result set and return how many were dropped."""
        with self._lock:
            dropped = len(self._cache)
            self._cache.clear()
            cache_entries.set(0)
        logger.info(f"Orders cache cleared ({dropped} entries)")
        return dropped

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._cache),
                max_entries=self.max_entries,
                ttl_seconds=self.ttl_seconds,
            )
