"""
Core data models for the purchase order data generator.

This module contains the order records produced by the generator, the
filter model accepted by it, and the summary and table-row models served
to the dashboard. All models are immutable once constructed and serialize
with camelCase aliases (``orderNumber``, ``lineItems``, ...).
"""

from collections.abc import Iterable
from datetime import date

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .pricing import TAX_RATE, line_total, round_currency

ORDER_NUMBER_PATTERN = r"^ORD-\d{4}-\d{2}-\d{2}-\d{4,}$"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


# ================================
# ORDER MODELS
# ================================


class OrderLineItem(_FrozenModel):
    """A single item line within a purchase order."""

    order_number: str = Field(
        ..., pattern=ORDER_NUMBER_PATTERN, description="Owning order number"
    )
    item_number: str = Field(..., min_length=1, description="Catalog item identifier")
    supplier_name: str = Field(..., min_length=1, description="Supplying vendor")
    quantity: int = Field(..., ge=1, le=20, description="Units ordered (1-20)")
    unit_price: float = Field(..., ge=0, description="Unit price in dollars (2dp)")

    @computed_field
    @property
    def total_price(self) -> float:
        """Extended price, derived from quantity and unit price."""
        return line_total(self.quantity, self.unit_price)


class Order(_FrozenModel):
    """Purchase order placed by a store on a single day."""

    order_number: str = Field(
        ...,
        pattern=ORDER_NUMBER_PATTERN,
        description="Unique order number (ORD-YYYY-MM-DD-NNNN)",
    )
    store_name: str = Field(..., min_length=1, description="Ordering store")
    order_date: date = Field(..., description="Order date (no time component)")
    subtotal_amount: float = Field(..., ge=0, description="Sum of line totals (2dp)")
    total_amount: float = Field(..., ge=0, description="Subtotal plus 8% tax (2dp)")
    line_items: tuple[OrderLineItem, ...] = Field(
        ..., min_length=1, description="Line items in discovery order"
    )

    @model_validator(mode="after")
    def validate_line_items_belong_to_order(self) -> "Order":
        """Validate that every line item carries this order's number."""
        foreign = [
            line.order_number
            for line in self.line_items
            if line.order_number != self.order_number
        ]
        if foreign:
            raise ValueError(
                f"Line items reference {sorted(set(foreign))} "
                f"but belong to order {self.order_number}"
            )
        return self

    @model_validator(mode="after")
    def validate_order_total(self) -> "Order":
        """Validate that Total = Subtotal * (1 + tax rate)."""
        expected_total = round_currency(self.subtotal_amount * (1 + TAX_RATE))
        if abs(self.total_amount - expected_total) > 0.01:  # Allow for rounding
            raise ValueError(
                f"Total ({self.total_amount}) must equal Subtotal "
                f"({self.subtotal_amount}) plus {TAX_RATE:.0%} tax"
            )
        return self

    @property
    def line_item_count(self) -> int:
        return len(self.line_items)

    @property
    def line_items_total(self) -> float:
        """Sum of line ``total_price`` values, as shown in the orders table."""
        return round_currency(sum(line.total_price for line in self.line_items))


# ================================
# FILTER MODELS
# ================================


class OrderFilters(_FrozenModel):
    """
    Optional restrictions applied while generating orders.

    ``None`` for a field means "no restriction". An empty list is a real
    restriction that nothing satisfies. Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    store_names: list[str] | None = Field(
        None, description="Only include orders from these stores"
    )
    supplier_names: list[str] | None = Field(
        None, description="Only include line items from these suppliers"
    )
    item_numbers: list[str] | None = Field(
        None, description="Only include line items for these items"
    )

    @field_validator("store_names", "supplier_names", "item_numbers", mode="before")
    @classmethod
    def coerce_to_list(cls, v):
        """Accept any iterable of strings (sets, tuples) as a list."""
        if v is None or isinstance(v, list):
            return v
        if isinstance(v, str):
            return [v]
        if isinstance(v, Iterable):
            return list(v)
        return v

    @property
    def is_empty(self) -> bool:
        return (
            self.store_names is None
            and self.supplier_names is None
            and self.item_numbers is None
        )

    def allows_store(self, store_name: str) -> bool:
        return self.store_names is None or store_name in self.store_names

    def allows_supplier(self, supplier_name: str) -> bool:
        return self.supplier_names is None or supplier_name in self.supplier_names

    def allows_item(self, item_number: str) -> bool:
        return self.item_numbers is None or item_number in self.item_numbers

    def cache_key(self) -> tuple[frozenset[str] | None, ...]:
        """Hashable key that ignores value order and duplicates."""
        return tuple(
            None if values is None else frozenset(values)
            for values in (self.store_names, self.supplier_names, self.item_numbers)
        )


# ================================
# DASHBOARD MODELS
# ================================


class OrderSummary(_FrozenModel):
    """Aggregate statistics shown in the dashboard summary cards."""

    total_orders: int = Field(..., ge=0, description="Number of orders")
    total_line_items: int = Field(..., ge=0, description="Line items across orders")
    total_amount: float = Field(
        ..., ge=0, description="Sum of line item totals before tax"
    )
    subtotal_amount: float = Field(..., ge=0, description="Sum of order subtotals")
    grand_total_amount: float = Field(
        ..., ge=0, description="Sum of tax-inclusive order totals"
    )


class OrderTableRow(_FrozenModel):
    """One row of the orders table."""

    order_number: str = Field(..., description="Order number")
    store_name: str = Field(..., description="Ordering store")
    order_date: date = Field(..., description="Order date")
    total_amount: float = Field(..., ge=0, description="Sum of line item totals")
    line_item_count: int = Field(..., ge=1, description="Number of line items")


class DateRange(_FrozenModel):
    """An inclusive date range, optionally produced by a named preset."""

    start_date: date = Field(..., description="First day (inclusive)")
    end_date: date = Field(..., description="Last day (inclusive)")
    preset: str | None = Field(None, description="Preset label, if any")
    label: str | None = Field(
        None, description="Display text, e.g. 'Jan 1, 2024 - Jan 7, 2024 (Last 7 Days)'"
    )
