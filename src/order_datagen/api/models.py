"""
Pydantic models for FastAPI requests and responses.

This module contains the response envelopes for order queries, the orders
table, catalog lookups and date presets, plus the shared error and health
responses.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..shared.catalog import FrequencyTier
from ..shared.models import (
    DateRange,
    Order,
    OrderFilters,
    OrderSummary,
    OrderTableRow,
)


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


# ================================
# ORDER RESPONSE MODELS
# ================================


class OrdersResponse(_ApiModel):
    """Response model for an orders query."""

    start_date: date = Field(..., description="First day of the range (inclusive)")
    end_date: date = Field(..., description="Last day of the range (inclusive)")
    preset: str | None = Field(None, description="Date preset used, if any")
    label: str = Field(..., description="Date range display text")
    filters: OrderFilters = Field(..., description="Filters applied to the query")
    summary: OrderSummary = Field(..., description="Summary card statistics")
    orders: list[Order] = Field(..., description="Orders, most recent first")


class OrderTablePage(_ApiModel):
    """Response model for one page of the orders table."""

    start_date: date = Field(..., description="First day of the range (inclusive)")
    end_date: date = Field(..., description="Last day of the range (inclusive)")
    sort_by: str = Field(..., description="Column the rows are sorted by")
    descending: bool = Field(..., description="Whether the sort is descending")
    page: int = Field(..., ge=1, description="1-based page number")
    page_size: int = Field(..., ge=1, description="Rows per page")
    total_rows: int = Field(..., ge=0, description="Rows across all pages")
    total_pages: int = Field(..., ge=0, description="Number of pages")
    summary: OrderSummary = Field(..., description="Summary card statistics")
    rows: list[OrderTableRow] = Field(..., description="Rows on this page")


# ================================
# CATALOG RESPONSE MODELS
# ================================


class CatalogResponse(_ApiModel):
    """Response model for catalog listings (stores, suppliers, items)."""

    values: list[str] = Field(..., description="Catalog entries in catalog order")
    count: int = Field(..., ge=0, description="Number of entries")


class ItemDetailResponse(_ApiModel):
    """Response model for a single catalog item."""

    item_number: str = Field(..., description="Item identifier")
    tier: FrequencyTier = Field(..., description="Order frequency tier")
    orders_per_week: float = Field(..., gt=0, description="Mean orders per week")
    base_price: float = Field(..., ge=0, description="Stable base unit price (2dp)")


class DatePresetsResponse(_ApiModel):
    """Response model for the available date range presets."""

    default_preset: str = Field(..., description="Preset selected on first load")
    presets: list[DateRange] = Field(..., description="Presets resolved for today")


class CacheClearResponse(_ApiModel):
    """Response model for clearing the orders cache."""

    cleared_entries: int = Field(..., ge=0, description="Result sets dropped")
    timestamp: datetime = Field(..., description="When the cache was cleared")


# ================================
# SYSTEM RESPONSE MODELS
# ================================


class HealthCheckResponse(BaseModel):
    """Response model for health checks."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    checks: dict[str, dict[str, Any]] = Field(
        ..., description="Individual component health checks"
    )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error timestamp")


class ValidationErrorResponse(BaseModel):
    """Response model for validation errors."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="General error message")
    field_errors: list[dict[str, Any]] = Field(
        ..., description="Detailed field validation errors"
    )
    timestamp: datetime = Field(..., description="Error timestamp")
