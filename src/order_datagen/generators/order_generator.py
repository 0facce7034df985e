"""
Deterministic purchase order generation.

Orders are synthesized per request from seeded randomness: for every day in
the requested range and every catalog item, a stream seeded by
``"<date>-<item>"`` decides whether the item was ordered that day and, if so,
by which store, from which supplier, in what quantity, at what price and
into which of the store's daily orders the line falls.

The draw sequence per (day, item) stream is fixed:

    order? -> [item filter] -> store -> [store filter] -> supplier
           -> [supplier filter] -> quantity -> price variance -> order bucket

Filters are checked between draws and never consume a draw themselves, so
a filtered request returns exactly the matching line items of the
unfiltered request (order numbers aside, since those count created orders).
"""

import logging
import math
import time
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import ValidationError

from order_datagen.shared.catalog import (
    ITEM_NUMBERS,
    STORE_NAMES,
    SUPPLIER_NAMES,
    get_item_frequency,
)
from order_datagen.shared.exceptions import InvalidArgumentError
from order_datagen.shared.metrics import (
    days_generated_total,
    generation_duration_seconds,
    line_items_generated_total,
    orders_generated_total,
)
from order_datagen.shared.models import Order, OrderFilters, OrderLineItem
from order_datagen.shared.pricing import calculate_order_totals, get_item_price
from order_datagen.shared.seeded_random import seeded_random_for_key

logger = logging.getLogger(__name__)

ORDER_BUCKETS_PER_STORE = 3
MAX_QUANTITY = 20
DAYS_PER_WEEK = 7


@dataclass
class _OrderDraft:
    """An order still collecting line items."""

    order_number: str
    store_name: str
    order_date: date
    line_items: list[OrderLineItem] = field(default_factory=list)

    def build(self) -> Order:
        subtotal, total = calculate_order_totals(self.line_items)
        return Order(
            order_number=self.order_number,
            store_name=self.store_name,
            order_date=self.order_date,
            subtotal_amount=subtotal,
            total_amount=total,
            line_items=tuple(self.line_items),
        )


def coerce_date(value: Any, argument: str = "date") -> date:
    """
    Convert a caller-supplied value to a calendar date.

    Accepts ``date`` objects, ``datetime`` objects (the time component is
    dropped) and ISO ``YYYY-MM-DD`` strings.

    Raises:
        InvalidArgumentError: For any other type or an unparsable string
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidArgumentError(
                "Date must be in YYYY-MM-DD format",
                argument=argument,
                invalid_value=value,
            ) from None
    raise InvalidArgumentError(
        f"Expected a date, got {type(value).__name__}",
        argument=argument,
        invalid_value=value,
    )


def coerce_filters(filters: OrderFilters | Mapping[str, Any] | None) -> OrderFilters:
    """Normalize ``filters`` to an OrderFilters instance."""
    if filters is None:
        return OrderFilters()
    if isinstance(filters, OrderFilters):
        return filters
    if isinstance(filters, Mapping):
        try:
            return OrderFilters.model_validate(dict(filters))
        except ValidationError as e:
            raise InvalidArgumentError(
                "Invalid order filters",
                argument="filters",
                validation_errors=[err["msg"] for err in e.errors()],
            ) from e
    raise InvalidArgumentError(
        f"Expected order filters, got {type(filters).__name__}",
        argument="filters",
        invalid_value=filters,
    )


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """Yield each calendar day from start to end, inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def generate_orders(
    start_date: date | datetime | str,
    end_date: date | datetime | str,
    filters: OrderFilters | Mapping[str, Any] | None = None,
) -> list[Order]:
    """
    Generate orders for a date range with deterministic randomness.

    The same arguments always produce the same orders, line items, prices
    and ordering.

    Args:
        start_date: First day of the range (inclusive)
        end_date: Last day of the range (inclusive)
        filters: Optional store/supplier/item restrictions

    Returns:
        Orders sorted by order date, most recent first. Orders on the same
        day keep the order in which they were created. An inverted range
        yields an empty list.

    Raises:
        InvalidArgumentError: If either date or the filters are malformed
    """
    start = coerce_date(start_date, "start_date")
    end = coerce_date(end_date, "end_date")
    order_filters = coerce_filters(filters)

    if start > end:
        logger.debug(f"Inverted date range {start} > {end}; returning no orders")
        return []

    started_at = time.perf_counter()
    drafts: dict[str, _OrderDraft] = {}
    day_count = 0

    for day in iter_days(start, end):
        day_count += 1
        date_str = day.isoformat()

        # For each item, decide if it should have an order on this day
        for item_number in ITEM_NUMBERS:
            frequency = get_item_frequency(item_number)
            rng = seeded_random_for_key(f"{date_str}-{item_number}")

            daily_probability = frequency.orders_per_week / DAYS_PER_WEEK
            if rng() >= daily_probability:
                continue

            if not order_filters.allows_item(item_number):
                continue

            store_name = STORE_NAMES[math.floor(rng() * len(STORE_NAMES))]
            if not order_filters.allows_store(store_name):
                continue

            supplier_name = SUPPLIER_NAMES[math.floor(rng() * len(SUPPLIER_NAMES))]
            if not order_filters.allows_supplier(supplier_name):
                continue

            quantity = math.floor(rng() * MAX_QUANTITY) + 1
            unit_price = get_item_price(item_number, rng)

            # Up to three orders per store per day
            bucket = math.floor(rng() * ORDER_BUCKETS_PER_STORE)
            order_key = f"{date_str}-{store_name}-{bucket}"

            draft = drafts.get(order_key)
            if draft is None:
                draft = _OrderDraft(
                    order_number=f"ORD-{date_str}-{len(drafts) + 1:04d}",
                    store_name=store_name,
                    order_date=day,
                )
                drafts[order_key] = draft

            draft.line_items.append(
                OrderLineItem(
                    order_number=draft.order_number,
                    item_number=item_number,
                    supplier_name=supplier_name,
                    quantity=quantity,
                    unit_price=unit_price,
                )
            )

    orders = [draft.build() for draft in drafts.values()]
    # sorted() is stable, so same-day orders stay in creation order
    orders = sorted(orders, key=lambda order: order.order_date, reverse=True)

    line_item_count = sum(order.line_item_count for order in orders)
    days_generated_total.inc(day_count)
    orders_generated_total.inc(len(orders))
    line_items_generated_total.inc(line_item_count)
    generation_duration_seconds.observe(time.perf_counter() - started_at)

    logger.debug(
        f"Generated {len(orders)} orders with {line_item_count} line items "
        f"for {start} to {end} ({day_count} days)"
    )
    return orders
