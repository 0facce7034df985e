"""
FastAPI router for order query endpoints.

This module provides the endpoints the dashboard uses to fetch orders for a
date range, a paginated and sortable orders table, and orders for a named
date preset.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from ...config.models import DashboardConfig
from ...shared.cache import OrdersQueryCache
from ...shared.date_presets import format_date_range, resolve_preset
from ...shared.dependencies import (
    check_range_limit,
    fetch_orders,
    get_config,
    get_orders_cache,
)
from ...shared.exceptions import InvalidArgumentError
from ...shared.logging_utils import get_structured_logger
from ...shared.models import OrderFilters
from ...shared.summary import (
    DEFAULT_SORT_COLUMN,
    build_table_rows,
    paginate,
    sort_rows,
    summarize_orders,
)
from ..models import CacheClearResponse, OrdersResponse, OrderTablePage
from .common import OrderQuery, get_filters, get_order_query

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

router = APIRouter()


# ================================
# ORDER ENDPOINTS
# ================================


@router.get(
    "/orders",
    response_model=OrdersResponse,
    summary="Get orders",
    description="Generate orders for a date range, optionally filtered",
)
async def get_orders(
    query: OrderQuery = Depends(get_order_query),
    cache: OrdersQueryCache | None = Depends(get_orders_cache),
):
    """Get orders for a date range, most recent first."""
    orders = await run_in_threadpool(
        fetch_orders, query.start_date, query.end_date, query.filters, cache
    )
    summary = summarize_orders(orders)

    structured_logger.info(
        "Orders fetched",
        start_date=query.start_date,
        end_date=query.end_date,
        total_orders=summary.total_orders,
        total_line_items=summary.total_line_items,
        filtered=not query.filters.is_empty,
    )

    return OrdersResponse(
        start_date=query.start_date,
        end_date=query.end_date,
        label=format_date_range(query.start_date, query.end_date),
        filters=query.filters,
        summary=summary,
        orders=orders,
    )


@router.get(
    "/orders/table",
    response_model=OrderTablePage,
    summary="Get orders table page",
    description="Get one sorted page of order rows with summary statistics",
)
async def get_orders_table(
    query: OrderQuery = Depends(get_order_query),
    sort_by: str = Query(DEFAULT_SORT_COLUMN, description="Column to sort by"),
    descending: bool = Query(False, description="Sort descending"),
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int | None = Query(None, ge=1, description="Rows per page"),
    config: DashboardConfig = Depends(get_config),
    cache: OrdersQueryCache | None = Depends(get_orders_cache),
):
    """Get a sorted, paginated page of the orders table."""
    size = page_size or config.api.default_page_size
    if size > config.api.max_page_size:
        raise InvalidArgumentError(
            f"Page size cannot exceed {config.api.max_page_size}",
            argument="page_size",
            invalid_value=size,
        )

    orders = await run_in_threadpool(
        fetch_orders, query.start_date, query.end_date, query.filters, cache
    )
    rows = sort_rows(build_table_rows(orders), sort_by, descending)
    page_rows, total_pages = paginate(rows, page, size)

    return OrderTablePage(
        start_date=query.start_date,
        end_date=query.end_date,
        sort_by=sort_by,
        descending=descending,
        page=page,
        page_size=size,
        total_rows=len(rows),
        total_pages=total_pages,
        summary=summarize_orders(orders),
        rows=page_rows,
    )


@router.get(
    "/orders/preset/{preset}",
    response_model=OrdersResponse,
    summary="Get orders for a date preset",
    description="Get orders for a named date range ending today (e.g. 'Last 7 Days')",
)
async def get_orders_for_preset(
    preset: str,
    filters: OrderFilters = Depends(get_filters),
    config: DashboardConfig = Depends(get_config),
    cache: OrdersQueryCache | None = Depends(get_orders_cache),
):
    """Get orders for a preset date range."""
    date_range = resolve_preset(preset)
    check_range_limit(date_range.start_date, date_range.end_date, config)

    orders = await run_in_threadpool(
        fetch_orders, date_range.start_date, date_range.end_date, filters, cache
    )

    return OrdersResponse(
        start_date=date_range.start_date,
        end_date=date_range.end_date,
        preset=date_range.preset,
        label=date_range.label,
        filters=filters,
        summary=summarize_orders(orders),
        orders=orders,
    )


# ================================
# CACHE ENDPOINTS
# ================================


@router.post(
    "/cache/clear",
    response_model=CacheClearResponse,
    summary="Clear orders cache",
    description="Drop every cached order result set",
)
async def clear_orders_cache(
    cache: OrdersQueryCache | None = Depends(get_orders_cache),
):
    """Clear the orders query cache."""
    cleared = cache.clear() if cache is not None else 0
    return CacheClearResponse(cleared_entries=cleared, timestamp=datetime.now(UTC))
