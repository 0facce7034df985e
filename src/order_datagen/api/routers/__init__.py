"""
FastAPI routers for the orders dashboard API.

This package provides the order query endpoints and the catalog and date
preset lookups used to populate the dashboard filters.
"""

from fastapi import APIRouter

from .catalog_routes import router as catalog_router
from .orders_routes import router as orders_router

# Create main router that combines all sub-routers
router = APIRouter()

# Include all sub-routers
router.include_router(orders_router, tags=["Orders"])
router.include_router(catalog_router, tags=["Catalog"])

__all__ = ["router"]
