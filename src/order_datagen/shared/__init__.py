"""Shared models, catalog, pricing and utilities for the order data generator."""

from order_datagen.shared.catalog import (
    list_item_numbers,
    list_store_names,
    list_supplier_names,
)

__all__ = ["list_store_names", "list_supplier_names", "list_item_numbers"]
