"""
Unit tests for deterministic order generation.

Tests reproducibility, filter semantics, order grouping and numbering,
and the generated amounts.
"""

from collections import Counter
from datetime import date, datetime, timedelta

import pytest

_hyp = pytest.importorskip("hypothesis")
from hypothesis import given, settings  # noqa: E402
from hypothesis import strategies as st  # noqa: E402

from order_datagen.generators.order_generator import (  # noqa: E402
    coerce_date,
    generate_orders,
    iter_days,
)
from order_datagen.shared.catalog import ITEM_NUMBERS, STORE_NAMES  # noqa: E402
from order_datagen.shared.exceptions import InvalidArgumentError  # noqa: E402
from order_datagen.shared.models import OrderFilters  # noqa: E402
from order_datagen.shared.pricing import TAX_RATE, round_currency  # noqa: E402


def _line_signatures(orders, store_names=None):
    """Flatten orders to comparable line tuples, ignoring order numbers."""
    return sorted(
        (
            order.order_date,
            order.store_name,
            line.item_number,
            line.supplier_name,
            line.quantity,
            line.unit_price,
        )
        for order in orders
        if store_names is None or order.store_name in store_names
        for line in order.line_items
    )


def _order_sequence(order_number: str) -> int:
    return int(order_number.rsplit("-", 1)[1])


class TestDeterminism:
    """The same arguments always yield the same orders."""

    def test_repeated_calls_are_identical(self, week_range):
        start, end = week_range
        assert generate_orders(start, end) == generate_orders(start, end)

    @settings(deadline=None, max_examples=20)
    @given(
        start=st.dates(min_value=date(2000, 1, 1), max_value=date(2099, 12, 31)),
        span=st.integers(min_value=0, max_value=6),
    )
    def test_any_range_is_reproducible(self, start, span):
        end = start + timedelta(days=span)
        first = generate_orders(start, end)
        second = generate_orders(start, end)
        assert first == second
        assert [o.model_dump_json() for o in first] == [
            o.model_dump_json() for o in second
        ]

    def test_day_contents_do_not_depend_on_range(self):
        """Line items of a day are the same whether requested alone or in a range."""
        day = date(2024, 3, 15)
        alone = generate_orders(day, day)
        in_range = [
            order
            for order in generate_orders(day - timedelta(days=3), day + timedelta(days=3))
            if order.order_date == day
        ]
        assert _line_signatures(alone) == _line_signatures(in_range)

    def test_accepts_strings_and_datetimes(self, single_day):
        expected = generate_orders(single_day, single_day)
        assert generate_orders("2024-01-01", "2024-01-01") == expected
        assert (
            generate_orders(datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 1, 0, 1))
            == expected
        )


class TestSingleDay:
    """Scenario: generating one day of orders."""

    def test_orders_for_single_day(self, single_day):
        orders = generate_orders(single_day, single_day)

        assert orders, "a full catalog day should produce orders"
        for order in orders:
            assert order.order_date == single_day
            assert order.order_number.startswith("ORD-2024-01-01-")
            assert order.store_name in STORE_NAMES
            assert order.line_items

        items = {line.item_number for order in orders for line in order.line_items}
        assert items <= set(ITEM_NUMBERS)

    def test_order_numbers_are_sequential(self, single_day):
        orders = generate_orders(single_day, single_day)
        sequence = [_order_sequence(order.order_number) for order in orders]
        assert sequence == list(range(1, len(orders) + 1))

    def test_each_item_appears_at_most_once(self, single_day):
        orders = generate_orders(single_day, single_day)
        items = [line.item_number for order in orders for line in order.line_items]
        assert len(items) == len(set(items))

    def test_line_items_follow_catalog_order(self, single_day):
        for order in generate_orders(single_day, single_day):
            positions = [ITEM_NUMBERS.index(line.item_number) for line in order.line_items]
            assert positions == sorted(positions)

    def test_at_most_three_orders_per_store(self, single_day):
        orders = generate_orders(single_day, single_day)
        per_store = Counter(order.store_name for order in orders)
        assert max(per_store.values()) <= 3


class TestMultiDay:
    """Ordering, numbering and volume across a range."""

    def test_sorted_most_recent_first(self, week_range):
        orders = generate_orders(*week_range)
        dates = [order.order_date for order in orders]
        assert dates == sorted(dates, reverse=True)

    def test_covers_every_day(self, week_range):
        start, end = week_range
        dates = {order.order_date for order in generate_orders(start, end)}
        assert dates == set(iter_days(start, end))

    def test_numbers_are_global_across_days(self, week_range):
        orders = generate_orders(*week_range)
        sequence = sorted(_order_sequence(order.order_number) for order in orders)
        assert sequence == list(range(1, len(orders) + 1))

    def test_same_day_orders_keep_creation_order(self, week_range):
        orders = generate_orders(*week_range)
        by_day: dict[date, list[int]] = {}
        for order in orders:
            by_day.setdefault(order.order_date, []).append(
                _order_sequence(order.order_number)
            )
        for sequence in by_day.values():
            assert sequence == sorted(sequence)

    def test_order_number_embeds_order_date(self, week_range):
        for order in generate_orders(*week_range):
            assert order.order_number.startswith(f"ORD-{order.order_date.isoformat()}-")

    def test_at_most_three_orders_per_store_per_day(self, week_range):
        orders = generate_orders(*week_range)
        counts = Counter((order.order_date, order.store_name) for order in orders)
        assert max(counts.values()) <= 3

    def test_line_item_volume(self):
        """About 38 line items per day across the catalog."""
        orders = generate_orders(date(2024, 2, 1), date(2024, 2, 28))
        line_items = sum(order.line_item_count for order in orders)
        assert 700 <= line_items <= 1400

    def test_inverted_range_is_empty(self):
        assert generate_orders(date(2024, 1, 2), date(2024, 1, 1)) == []


class TestAmounts:
    """Quantities, prices and totals."""

    def test_quantity_and_price_bounds(self, week_range):
        for order in generate_orders(*week_range):
            for line in order.line_items:
                assert 1 <= line.quantity <= 20
                # Base prices are in [5, 150) with +/-5% variance
                assert 4.75 <= line.unit_price <= 157.5
                assert line.unit_price == round_currency(line.unit_price)

    def test_totals_include_tax(self, week_range):
        for order in generate_orders(*week_range):
            subtotal = round_currency(
                sum(line.quantity * line.unit_price for line in order.line_items)
            )
            assert order.subtotal_amount == subtotal
            assert order.total_amount == round_currency(subtotal * (1 + TAX_RATE))


class TestFilters:
    """Filters restrict output without changing the matching line items."""

    def test_store_filter(self, week_range):
        stores = ["Store A", "Store C"]
        orders = generate_orders(*week_range, OrderFilters(store_names=stores))

        assert orders
        assert {order.store_name for order in orders} <= set(stores)

    def test_store_filter_matches_unfiltered_lines(self, week_range):
        stores = ["Store B", "Store E"]
        unfiltered = generate_orders(*week_range)
        filtered = generate_orders(*week_range, {"store_names": stores})

        assert _line_signatures(filtered) == _line_signatures(unfiltered, stores)

    def test_supplier_and_item_filters(self, week_range):
        suppliers = ["Supplier 1", "Supplier 2", "Supplier 3"]
        items = list(ITEM_NUMBERS[:60])
        filters = OrderFilters(supplier_names=suppliers, item_numbers=items)
        unfiltered = generate_orders(*week_range)
        filtered = generate_orders(*week_range, filters)

        for order in filtered:
            for line in order.line_items:
                assert line.supplier_name in suppliers
                assert line.item_number in items

        expected = sorted(
            signature
            for signature in _line_signatures(unfiltered)
            if signature[3] in suppliers and signature[2] in items
        )
        assert _line_signatures(filtered) == expected

    def test_filtered_order_numbers_restart(self, single_day):
        orders = generate_orders(
            single_day, single_day, OrderFilters(store_names=["Store D"])
        )
        if orders:
            assert orders[0].order_number == "ORD-2024-01-01-0001"

    def test_empty_filter_list_matches_nothing(self, week_range):
        assert generate_orders(*week_range, OrderFilters(item_numbers=[])) == []

    def test_unknown_values_match_nothing(self, week_range):
        assert generate_orders(*week_range, {"store_names": ["Store Z"]}) == []

    def test_empty_filters_equal_no_filters(self, week_range):
        assert generate_orders(*week_range, OrderFilters()) == generate_orders(
            *week_range
        )


class TestInvalidArguments:
    """Malformed arguments raise InvalidArgumentError."""

    @pytest.mark.parametrize("value", ["2024-13-01", "yesterday", "", "01/02/2024"])
    def test_bad_date_strings(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            generate_orders(value, "2024-01-01")
        assert exc_info.value.argument == "start_date"

    @pytest.mark.parametrize("value", [None, 20240101, 1.5, ["2024-01-01"]])
    def test_bad_date_types(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            generate_orders("2024-01-01", value)
        assert exc_info.value.argument == "end_date"

    def test_bad_filter_type(self):
        with pytest.raises(InvalidArgumentError):
            generate_orders("2024-01-01", "2024-01-01", filters=42)

    def test_bad_filter_values(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            generate_orders("2024-01-01", "2024-01-01", {"store_names": 7})
        assert exc_info.value.validation_errors

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            generate_orders("not a date", "2024-01-01")


class TestHelpers:
    """Tests for the date helpers."""

    def test_coerce_date_strips_time(self):
        assert coerce_date(datetime(2024, 5, 6, 12, 30)) == date(2024, 5, 6)

    def test_coerce_date_strips_whitespace(self):
        assert coerce_date(" 2024-05-06 ") == date(2024, 5, 6)

    def test_iter_days_inclusive(self):
        days = list(iter_days(date(2024, 2, 27), date(2024, 3, 1)))
        assert days == [
            date(2024, 2, 27),
            date(2024, 2, 28),
            date(2024, 2, 29),
            date(2024, 3, 1),
        ]

    def test_iter_days_empty_when_inverted(self):
        assert list(iter_days(date(2024, 1, 2), date(2024, 1, 1))) == []
