"""
Common query parsing shared by the order routers.

Date parameters are accepted as raw strings and converted by the generator's
own date coercion, so malformed dates surface as ``InvalidArgumentError``
(HTTP 400) with the same message the generator uses.
"""

import logging
from dataclasses import dataclass
from datetime import date

from fastapi import Depends, Query

from ...config.models import DashboardConfig
from ...generators.order_generator import coerce_date
from ...shared.dependencies import check_range_limit, get_config
from ...shared.models import OrderFilters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderQuery:
    """Validated date range and filters for an orders request."""

    start_date: date
    end_date: date
    filters: OrderFilters


def build_filters(
    store_names: list[str] | None,
    supplier_names: list[str] | None,
    item_numbers: list[str] | None,
) -> OrderFilters:
    """Build filters from repeated query parameters; absent means unrestricted."""
    return OrderFilters(
        store_names=store_names,
        supplier_names=supplier_names,
        item_numbers=item_numbers,
    )


async def get_filters(
    store_names: list[str] | None = Query(
        None, description="Only orders from these stores (repeatable)"
    ),
    supplier_names: list[str] | None = Query(
        None, description="Only line items from these suppliers (repeatable)"
    ),
    item_numbers: list[str] | None = Query(
        None, description="Only line items for these items (repeatable)"
    ),
) -> OrderFilters:
    return build_filters(store_names, supplier_names, item_numbers)


async def get_order_query(
    start_date: str = Query(..., description="First day (YYYY-MM-DD)"),
    end_date: str = Query(..., description="Last day (YYYY-MM-DD)"),
    filters: OrderFilters = Depends(get_filters),
    config: DashboardConfig = Depends(get_config),
) -> OrderQuery:
    """Parse and validate the date range and filters of an orders request."""
    start = coerce_date(start_date, "start_date")
    end = coerce_date(end_date, "end_date")
    check_range_limit(start, end, config)
    return OrderQuery(start_date=start, end_date=end, filters=filters)
