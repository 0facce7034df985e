"""
Pytest configuration and fixtures for order data generator tests.

Provides common test fixtures, sample orders, and an API test client.
"""

import json
import os
import sys
import tempfile
from datetime import date
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for local test runs without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from order_datagen.shared.models import Order, OrderLineItem  # noqa: E402


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch):
    """Keep developer environment variables out of configuration tests."""
    for name in list(os.environ):
        if name.startswith("ORDER_DATAGEN_") or name == "ALLOWED_ORIGINS":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def single_day() -> date:
    """The day used by the single-day scenario."""
    return date(2024, 1, 1)


@pytest.fixture
def week_range() -> tuple[date, date]:
    """A seven day range spanning a month boundary."""
    return date(2024, 1, 29), date(2024, 2, 4)


@pytest.fixture
def sample_config_data() -> dict:
    """Sample configuration data for testing."""
    return {
        "cache": {"enabled": True, "max_entries": 16, "ttl_seconds": 60},
        "api": {
            "default_page_size": 25,
            "max_page_size": 100,
            "max_range_days": 92,
            "allowed_origins": ["http://localhost:3000"],
        },
        "logging": {"level": "debug", "json_messages": False},
    }


@pytest.fixture
def temp_config_file(sample_config_data) -> str:
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".json", delete=False
    ) as temp_file:
        json.dump(sample_config_data, temp_file)
        temp_path = temp_file.name

    yield temp_path

    # Cleanup
    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def sample_orders() -> list[Order]:
    """Two hand-built orders with easily checked totals."""
    return [
        Order(
            order_number="ORD-2024-01-02-0002",
            store_name="Store B",
            order_date=date(2024, 1, 2),
            subtotal_amount=25.25,
            total_amount=27.27,
            line_items=(
                OrderLineItem(
                    order_number="ORD-2024-01-02-0002",
                    item_number="ITEM-001",
                    supplier_name="Supplier 1",
                    quantity=2,
                    unit_price=10.0,
                ),
                OrderLineItem(
                    order_number="ORD-2024-01-02-0002",
                    item_number="ITEM-002",
                    supplier_name="Supplier 2",
                    quantity=1,
                    unit_price=5.25,
                ),
            ),
        ),
        Order(
            order_number="ORD-2024-01-01-0001",
            store_name="Store A",
            order_date=date(2024, 1, 1),
            subtotal_amount=3.3,
            total_amount=3.56,
            line_items=(
                OrderLineItem(
                    order_number="ORD-2024-01-01-0001",
                    item_number="ITEM-003",
                    supplier_name="Supplier 3",
                    quantity=3,
                    unit_price=1.1,
                ),
            ),
        ),
    ]
