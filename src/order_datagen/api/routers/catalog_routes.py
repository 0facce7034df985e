"""
FastAPI router for catalog and date preset endpoints.

These endpoints populate the dashboard's store, supplier and item filter
pickers and its date range presets.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ...shared.catalog import (
    get_item_frequency,
    list_item_numbers,
    list_store_names,
    list_supplier_names,
)
from ...shared.date_presets import DEFAULT_PRESET, list_presets
from ...shared.exceptions import InvalidArgumentError
from ...shared.pricing import get_base_price, round_currency
from ..models import CatalogResponse, DatePresetsResponse, ItemDetailResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# ================================
# CATALOG LISTING ENDPOINTS
# ================================


@router.get(
    "/catalog/stores",
    response_model=CatalogResponse,
    summary="List stores",
    description="Get all store names",
)
async def get_store_names():
    """List all store names."""
    stores = list_store_names()
    return CatalogResponse(values=stores, count=len(stores))


@router.get(
    "/catalog/suppliers",
    response_model=CatalogResponse,
    summary="List suppliers",
    description="Get all supplier names",
)
async def get_supplier_names():
    """List all supplier names."""
    suppliers = list_supplier_names()
    return CatalogResponse(values=suppliers, count=len(suppliers))


@router.get(
    "/catalog/items",
    response_model=CatalogResponse,
    summary="List items",
    description="Get all item numbers in catalog order",
)
async def get_item_numbers():
    """List all item numbers."""
    items = list_item_numbers()
    return CatalogResponse(values=items, count=len(items))


@router.get(
    "/catalog/items/{item_number}",
    response_model=ItemDetailResponse,
    summary="Get item details",
    description="Get an item's frequency tier and stable base price",
)
async def get_item_detail(item_number: str):
    """Get frequency and base price information for one item."""
    try:
        frequency = get_item_frequency(item_number)
    except InvalidArgumentError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {item_number} not found.",
        )

    return ItemDetailResponse(
        item_number=item_number,
        tier=frequency.tier,
        orders_per_week=frequency.orders_per_week,
        base_price=round_currency(get_base_price(item_number)),
    )


# ================================
# DATE PRESET ENDPOINTS
# ================================


@router.get(
    "/date-presets",
    response_model=DatePresetsResponse,
    summary="List date presets",
    description="Get the date range presets resolved against today",
)
async def get_date_presets():
    """List date range presets."""
    return DatePresetsResponse(
        default_preset=DEFAULT_PRESET.value, presets=list_presets()
    )
