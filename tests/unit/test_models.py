"""
Unit tests for the order, filter and dashboard models.

Tests validation rules, immutability and the camelCase wire format.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from order_datagen.shared.models import (
    DateRange,
    Order,
    OrderFilters,
    OrderLineItem,
    OrderTableRow,
)


def _line(order_number="ORD-2024-01-01-0001", quantity=2, unit_price=10.0, **kwargs):
    data = {
        "order_number": order_number,
        "item_number": "ITEM-001",
        "supplier_name": "Supplier 1",
        "quantity": quantity,
        "unit_price": unit_price,
    }
    data.update(kwargs)
    return OrderLineItem(**data)


class TestOrderLineItem:
    """Test order line item validation and derived values."""

    def test_valid_line_item(self):
        line = _line()
        assert line.total_price == 20.0

    def test_total_price_is_rounded(self):
        assert _line(quantity=3, unit_price=1.1).total_price == 3.3

    @pytest.mark.parametrize("quantity", [0, 21, -1])
    def test_quantity_bounds(self, quantity):
        with pytest.raises(ValidationError):
            _line(quantity=quantity)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _line(unit_price=-0.01)

    def test_order_number_format(self):
        with pytest.raises(ValidationError):
            _line(order_number="ORDER-1")

    def test_is_immutable(self):
        line = _line()
        with pytest.raises(ValidationError):
            line.quantity = 5

    def test_camel_case_serialization(self):
        data = _line().model_dump(by_alias=True)
        assert data == {
            "orderNumber": "ORD-2024-01-01-0001",
            "itemNumber": "ITEM-001",
            "supplierName": "Supplier 1",
            "quantity": 2,
            "unitPrice": 10.0,
            "totalPrice": 20.0,
        }

    def test_accepts_camel_case_input(self):
        line = OrderLineItem.model_validate(
            {
                "orderNumber": "ORD-2024-01-01-0001",
                "itemNumber": "ITEM-002",
                "supplierName": "Supplier 2",
                "quantity": 1,
                "unitPrice": 4.5,
            }
        )
        assert line.item_number == "ITEM-002"


class TestOrder:
    """Test order-level validation."""

    def test_valid_order(self, sample_orders):
        order = sample_orders[0]
        assert order.line_item_count == 2
        assert order.line_items_total == 25.25

    def test_line_items_must_belong_to_order(self):
        with pytest.raises(ValidationError, match="belong to order"):
            Order(
                order_number="ORD-2024-01-01-0001",
                store_name="Store A",
                order_date=date(2024, 1, 1),
                subtotal_amount=20.0,
                total_amount=21.6,
                line_items=(_line(order_number="ORD-2024-01-01-0002"),),
            )

    def test_total_must_include_tax(self):
        with pytest.raises(ValidationError, match="tax"):
            Order(
                order_number="ORD-2024-01-01-0001",
                store_name="Store A",
                order_date=date(2024, 1, 1),
                subtotal_amount=20.0,
                total_amount=20.0,
                line_items=(_line(),),
            )

    def test_total_within_a_cent_is_accepted(self):
        order = Order(
            order_number="ORD-2024-01-01-0001",
            store_name="Store A",
            order_date=date(2024, 1, 1),
            subtotal_amount=20.0,
            total_amount=21.605,
            line_items=(_line(),),
        )
        assert order.total_amount == 21.605

    def test_requires_line_items(self):
        with pytest.raises(ValidationError):
            Order(
                order_number="ORD-2024-01-01-0001",
                store_name="Store A",
                order_date=date(2024, 1, 1),
                subtotal_amount=0.0,
                total_amount=0.0,
                line_items=(),
            )

    def test_json_wire_format(self, sample_orders):
        data = sample_orders[1].model_dump(mode="json", by_alias=True)
        assert data["orderNumber"] == "ORD-2024-01-01-0001"
        assert data["orderDate"] == "2024-01-01"
        assert data["subtotalAmount"] == 3.3
        assert data["totalAmount"] == 3.56
        assert data["lineItems"][0]["totalPrice"] == 3.3

    def test_orders_compare_by_value(self, sample_orders):
        copy = Order.model_validate(sample_orders[0].model_dump())
        assert copy == sample_orders[0]


class TestOrderFilters:
    """Test filter normalization and matching."""

    def test_empty_filters(self):
        filters = OrderFilters()
        assert filters.is_empty
        assert filters.allows_store("Store A")
        assert filters.allows_supplier("Supplier 1")
        assert filters.allows_item("ITEM-001")

    def test_restrictions(self):
        filters = OrderFilters(
            store_names=["Store A"],
            supplier_names=["Supplier 2"],
            item_numbers=["ITEM-003"],
        )
        assert not filters.is_empty
        assert filters.allows_store("Store A")
        assert not filters.allows_store("Store B")
        assert filters.allows_supplier("Supplier 2")
        assert not filters.allows_supplier("Supplier 1")
        assert filters.allows_item("ITEM-003")
        assert not filters.allows_item("ITEM-001")

    def test_empty_list_matches_nothing(self):
        filters = OrderFilters(store_names=[])
        assert not filters.is_empty
        assert not filters.allows_store("Store A")

    def test_coerces_iterables(self):
        filters = OrderFilters(store_names={"Store B"}, item_numbers=("ITEM-001",))
        assert filters.store_names == ["Store B"]
        assert filters.item_numbers == ["ITEM-001"]

    def test_single_string_becomes_list(self):
        assert OrderFilters(supplier_names="Supplier 3").supplier_names == [
            "Supplier 3"
        ]

    def test_accepts_camel_case_keys(self):
        filters = OrderFilters.model_validate({"storeNames": ["Store C"]})
        assert filters.store_names == ["Store C"]

    def test_cache_key_ignores_order_and_duplicates(self):
        first = OrderFilters(store_names=["Store A", "Store B", "Store A"])
        second = OrderFilters(store_names=["Store B", "Store A"])
        assert first.cache_key() == second.cache_key()

    def test_cache_key_distinguishes_none_from_empty(self):
        assert OrderFilters().cache_key() != OrderFilters(store_names=[]).cache_key()

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError, match="extra"):
            OrderFilters.model_validate({"stores": ["Store A"]})

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            OrderFilters(store_names=5)


class TestDashboardModels:
    """Test table row and date range models."""

    def test_table_row_requires_line_items(self):
        with pytest.raises(ValidationError):
            OrderTableRow(
                order_number="ORD-2024-01-01-0001",
                store_name="Store A",
                order_date=date(2024, 1, 1),
                total_amount=0.0,
                line_item_count=0,
            )

    def test_date_range_serialization(self):
        date_range = DateRange(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 7), preset="Last 7 Days"
        )
        assert date_range.model_dump(mode="json", by_alias=True) == {
            "startDate": "2024-01-01",
            "endDate": "2024-01-07",
            "preset": "Last 7 Days",
            "label": None,
        }
