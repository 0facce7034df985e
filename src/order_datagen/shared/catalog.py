"""
Fixed catalog of stores, suppliers and items.

The catalog is defined once at import time and never regenerated. Item
position is meaningful: the first 20% of ``ITEM_NUMBERS`` are ordered most
often, the next 50% at a medium rate and the last 30% rarely.
"""

from enum import Enum
from typing import NamedTuple

from .exceptions import InvalidArgumentError

STORE_COUNT = 10
SUPPLIER_COUNT = 15
ITEM_COUNT = 200

# Store A through Store J
STORE_NAMES: tuple[str, ...] = tuple(
    f"Store {chr(ord('A') + i)}" for i in range(STORE_COUNT)
)

# Supplier 1 through Supplier 15
SUPPLIER_NAMES: tuple[str, ...] = tuple(
    f"Supplier {i + 1}" for i in range(SUPPLIER_COUNT)
)

# ITEM-001 through ITEM-200
ITEM_NUMBERS: tuple[str, ...] = tuple(f"ITEM-{i + 1:03d}" for i in range(ITEM_COUNT))

_ITEM_INDEX: dict[str, int] = {item: i for i, item in enumerate(ITEM_NUMBERS)}


class FrequencyTier(str, Enum):
    """How often an item is typically ordered."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ItemFrequency(NamedTuple):
    tier: FrequencyTier
    orders_per_week: float


# (upper bound on index / ITEM_COUNT, frequency)
_FREQUENCY_BANDS: tuple[tuple[float, ItemFrequency], ...] = (
    (0.2, ItemFrequency(FrequencyTier.HIGH, 2.5)),  # 2-3 times per week
    (0.7, ItemFrequency(FrequencyTier.MEDIUM, 1.5)),  # 1-2 times per week
    (1.0, ItemFrequency(FrequencyTier.LOW, 0.25)),  # ~1 time per month
)


def get_item_index(item_number: str) -> int:
    """Return the catalog position of ``item_number``."""
    try:
        return _ITEM_INDEX[item_number]
    except KeyError:
        raise InvalidArgumentError(
            "Unknown item number", argument="item_number", invalid_value=item_number
        ) from None


def get_item_frequency(item_number: str) -> ItemFrequency:
    """
    Determine the frequency tier of an item from its catalog position.

    Args:
        item_number: Item identifier from ``ITEM_NUMBERS``

    Returns:
        ItemFrequency with the tier and mean orders per week

    Raises:
        InvalidArgumentError: If the item is not in the catalog
    """
    percentage = get_item_index(item_number) / ITEM_COUNT
    for upper_bound, frequency in _FREQUENCY_BANDS:
        if percentage < upper_bound:
            return frequency
    return _FREQUENCY_BANDS[-1][1]


def list_store_names() -> list[str]:
    """Get a copy of all store names."""
    return list(STORE_NAMES)


def list_supplier_names() -> list[str]:
    """Get a copy of all supplier names."""
    return list(SUPPLIER_NAMES)


def list_item_numbers() -> list[str]:
    """Get a copy of all item numbers in catalog order."""
    return list(ITEM_NUMBERS)
