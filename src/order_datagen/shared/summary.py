"""
Dashboard statistics and orders table helpers.

Turns a generated order list into the three summary card values and into
sortable, paginated table rows.
"""

from collections.abc import Sequence

from .exceptions import InvalidArgumentError
from .models import Order, OrderSummary, OrderTableRow
from .pricing import round_currency

DEFAULT_PAGE_SIZE = 25
DEFAULT_SORT_COLUMN = "order_number"
SORTABLE_COLUMNS = tuple(OrderTableRow.model_fields)


def summarize_orders(orders: Sequence[Order]) -> OrderSummary:
    """
    Calculate the summary card statistics for a set of orders.

    ``total_amount`` sums line item totals (pre-tax), matching the orders
    table; subtotal and grand totals sum the order-level amounts.
    """
    return OrderSummary(
        total_orders=len(orders),
        total_line_items=sum(order.line_item_count for order in orders),
        total_amount=round_currency(
            sum(line.total_price for order in orders for line in order.line_items)
        ),
        subtotal_amount=round_currency(sum(order.subtotal_amount for order in orders)),
        grand_total_amount=round_currency(sum(order.total_amount for order in orders)),
    )


def build_table_rows(orders: Sequence[Order]) -> list[OrderTableRow]:
    """Build one table row per order, preserving input order."""
    return [
        OrderTableRow(
            order_number=order.order_number,
            store_name=order.store_name,
            order_date=order.order_date,
            total_amount=order.line_items_total,
            line_item_count=order.line_item_count,
        )
        for order in orders
    ]


def sort_rows(
    rows: Sequence[OrderTableRow],
    sort_by: str = DEFAULT_SORT_COLUMN,
    descending: bool = False,
) -> list[OrderTableRow]:
    """
    Sort table rows by a column.

    Ties keep their incoming order in both directions.

    Raises:
        InvalidArgumentError: If ``sort_by`` is not a table column
    """
    if sort_by not in SORTABLE_COLUMNS:
        raise InvalidArgumentError(
            f"Cannot sort by '{sort_by}'. Sortable columns: {', '.join(SORTABLE_COLUMNS)}",
            argument="sort_by",
        )
    return sorted(rows, key=lambda row: getattr(row, sort_by), reverse=descending)


def paginate(
    rows: Sequence[OrderTableRow], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> tuple[list[OrderTableRow], int]:
    """
    Slice out one page of rows.

    Args:
        rows: All rows, already sorted
        page: 1-based page number; pages past the end are empty
        page_size: Rows per page

    Returns:
        (rows on the page, total number of pages)
    """
    if page < 1:
        raise InvalidArgumentError("Page must be >= 1", argument="page", invalid_value=page)
    if page_size < 1:
        raise InvalidArgumentError(
            "Page size must be >= 1", argument="page_size", invalid_value=page_size
        )

    total_pages = (len(rows) + page_size - 1) // page_size
    offset = (page - 1) * page_size
    return list(rows[offset : offset + page_size]), total_pages
