"""Item pricing, currency rounding and order tax calculation.

Unit prices are built from a base price that depends only on the item
number, so the same item costs roughly the same on every day. Each
occurrence then applies a +/-5% variance drawn from the day-item stream.

All amounts are floats rounded half-up to cents, which is how the
dashboard has always displayed them.
"""

import math
from collections.abc import Callable, Iterable
from typing import Protocol

from .seeded_random import hash_string, seeded_random

TAX_RATE = 0.08

BASE_PRICE_MIN = 5.0
BASE_PRICE_SPAN = 145.0
PRICE_VARIANCE = 0.1


class _PricedLine(Protocol):
    quantity: int
    unit_price: float


def round_currency(value: float) -> float:
    """Round to 2 decimal places, halves rounded up.

    Examples:
        >>> round_currency(0.125)
        0.13
        >>> round_currency(19.994)
        19.99
    """
    return math.floor(value * 100 + 0.5) / 100


def get_base_price(item_number: str) -> float:
    """Stable, unrounded base price for an item in [5, 150)."""
    base_rng = seeded_random(hash_string(item_number))
    return base_rng() * BASE_PRICE_SPAN + BASE_PRICE_MIN


def get_item_price(item_number: str, rng: Callable[[], float]) -> float:
    """Get the unit price for one occurrence of an item.

    Args:
        item_number: Item identifier
        rng: The day-item random stream; exactly one draw is consumed

    Returns:
        Base price with a -5% to +5% variance, rounded to cents
    """
    variance = (rng() - 0.5) * PRICE_VARIANCE
    return round_currency(get_base_price(item_number) * (1 + variance))


def line_total(quantity: int, unit_price: float) -> float:
    """Extended price of a line item, rounded to cents."""
    return round_currency(quantity * unit_price)


def calculate_order_totals(line_items: Iterable[_PricedLine]) -> tuple[float, float]:
    """Calculate an order's subtotal and tax-inclusive total.

    The subtotal sums ``quantity * unit_price`` in line order before
    rounding; the total applies the flat tax rate to the rounded subtotal.

    Returns:
        (subtotal_amount, total_amount)
    """
    subtotal = round_currency(
        sum(line.quantity * line.unit_price for line in line_items)
    )
    total = round_currency(subtotal * (1 + TAX_RATE))
    return subtotal, total
