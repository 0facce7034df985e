"""
Main FastAPI application entry point for the order data generator.

This module creates and configures the FastAPI application with all routes,
middleware, exception handlers, and startup/shutdown events.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from . import __version__
from .api.models import ErrorResponse, HealthCheckResponse, ValidationErrorResponse
from .api.routers import router as orders_api_router
from .config.models import DashboardConfig
from .config.settings import load_config_with_fallback
from .shared.cache import OrdersQueryCache
from .shared.catalog import ITEM_COUNT, STORE_COUNT, SUPPLIER_COUNT, list_item_numbers
from .shared.dependencies import get_config, get_orders_cache, update_config
from .shared.exceptions import InvalidArgumentError
from .shared.logging_utils import (
    CORRELATION_HEADER,
    generate_correlation_id,
    get_structured_logger,
)
from .shared.metrics import api_errors_total

logger = logging.getLogger(__name__)
request_logger = get_structured_logger("order_datagen.requests")

# Application metadata
APP_NAME = "Purchase Order Data API"
APP_VERSION = __version__
APP_DESCRIPTION = """
**Purchase Order Data API** serves deterministic synthetic purchase orders
for the orders dashboard.

## Features

### Orders
Fetch orders for any date range, filtered by store, supplier or item. The
same request always returns the same orders.

### Orders Table
Sorted, paginated table rows with summary statistics.

### Catalog & Presets
Store, supplier and item lists for filter pickers, and named date ranges.

## Data Safety
All order data is **synthetic**. Nothing is persisted between requests.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    from .shared.logging_config import configure_structured_logging

    config = load_config_with_fallback()
    configure_structured_logging(
        level=config.logging.level, json_messages=config.logging.json_messages
    )

    # Startup
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")
    await update_config(config)
    logger.info(
        f"Configuration loaded (cache enabled: {config.cache.enabled}, "
        f"max range: {config.api.max_range_days} days)"
    )

    logger.info("Application startup completed")

    yield

    # Shutdown
    logger.info("Application shutdown completed")


# Create FastAPI application
app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description=APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Configure CORS from config (ALLOWED_ORIGINS env var takes priority)
app.add_middleware(
    CORSMiddleware,
    allow_origins=load_config_with_fallback().api.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[CORRELATION_HEADER],
)


# ================================
# EXCEPTION HANDLERS
# ================================


def _error_content(error_response: ErrorResponse | ValidationErrorResponse) -> dict:
    return error_response.model_dump(mode="json")


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    """Handle invalid generator arguments (bad dates, filters, sort columns)."""
    api_errors_total.labels(error_type=type(exc).__name__).inc()
    logger.warning(f"Invalid argument for {request.method} {request.url}: {exc}")

    details = {}
    if exc.argument:
        details["argument"] = exc.argument
    if exc.validation_errors:
        details["validation_errors"] = exc.validation_errors

    error_response = ErrorResponse(
        error="INVALID_ARGUMENT",
        message=str(exc),
        details=details or None,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=_error_content(error_response)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent error format."""
    api_errors_total.labels(error_type=f"HTTP_{exc.status_code}").inc()

    error_response = ErrorResponse(
        error=f"HTTP_{exc.status_code}", message=exc.detail, timestamp=datetime.now(UTC)
    )
    return JSONResponse(
        status_code=exc.status_code, content=_error_content(error_response)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with detailed field information."""
    api_errors_total.labels(error_type="VALIDATION_ERROR").inc()
    logger.warning(f"Validation error for {request.method} {request.url}: {exc.errors()}")

    field_errors = []
    for error in exc.errors():
        field_errors.append(
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input"),
            }
        )

    error_response = ValidationErrorResponse(
        error="VALIDATION_ERROR",
        message="Request validation failed",
        field_errors=field_errors,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(error_response),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    api_errors_total.labels(error_type="INTERNAL_SERVER_ERROR").inc()
    logger.error(f"Unhandled exception: {exc}")
    logger.error(traceback.format_exc())

    error_response = ErrorResponse(
        error="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"exception_type": type(exc).__name__},
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(error_response),
    )


# ================================
# MIDDLEWARE
# ================================


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all requests and responses under a per-request correlation ID."""
    correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
    request_logger.set_correlation_id(correlation_id)
    start_time = datetime.now(UTC)

    client_host = request.client.host if request.client else "unknown"
    request_logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
        client=client_host,
    )

    try:
        response = await call_next(request)

        duration = (datetime.now(UTC) - start_time).total_seconds()
        request_logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
    finally:
        request_logger.clear_correlation_id()


# ================================
# CORE ROUTES
# ================================


@app.get(
    "/api",
    summary="Root endpoint",
    description="Welcome message and basic API information",
)
async def root():
    """Root endpoint with welcome message."""
    return {
        "message": f"Welcome to {APP_NAME}",
        "version": APP_VERSION,
        "docs_url": "/docs",
        "health_url": "/health",
        "timestamp": datetime.now(UTC),
    }


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Health check of configuration, catalog and orders cache",
)
async def health_check(
    config: DashboardConfig = Depends(get_config),
    cache: OrdersQueryCache | None = Depends(get_orders_cache),
):
    """Health check endpoint."""
    checks = {}
    overall_status = "healthy"

    checks["configuration"] = {
        "status": "healthy",
        "message": "Configuration loaded successfully",
        "max_range_days": config.api.max_range_days,
    }

    item_count = len(list_item_numbers())
    if item_count == ITEM_COUNT:
        checks["catalog"] = {
            "status": "healthy",
            "stores": STORE_COUNT,
            "suppliers": SUPPLIER_COUNT,
            "items": item_count,
        }
    else:
        checks["catalog"] = {"status": "unhealthy", "items": item_count}
        overall_status = "unhealthy"

    if cache is None:
        checks["orders_cache"] = {"status": "disabled"}
    else:
        checks["orders_cache"] = {"status": "healthy", **cache.stats().model_dump()}

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        checks=checks,
    )


@app.get(
    "/version",
    summary="Application version",
    description="Get current application version and build information",
)
async def get_version():
    """Get application version information."""
    return {"name": APP_NAME, "version": APP_VERSION, "timestamp": datetime.now(UTC)}


@app.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Prometheus metrics endpoint for generation volume, cache and errors",
    tags=["Monitoring"],
)
async def prometheus_metrics():
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus exposition format for scraping.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ================================
# CONFIGURATION ROUTES
# ================================


@app.get(
    "/api/config",
    summary="Get configuration",
    description="Get the current service configuration",
)
async def get_current_config(config: DashboardConfig = Depends(get_config)):
    """Get the current configuration."""
    return config.model_dump()


# ================================
# ROUTERS
# ================================

app.include_router(orders_api_router, prefix="/api")


# ================================
# DEVELOPMENT SERVER
# ================================


def run_dev_server():
    """Run the development server."""
    # Import here to avoid hard dependency during module import in test envs
    import uvicorn

    uvicorn.run(
        "order_datagen.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    run_dev_server()
