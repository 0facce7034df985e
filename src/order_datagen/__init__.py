"""
Purchase Order Data Generator

A deterministic synthetic purchase-order generator supporting:
- Reproducible order data for any date range from seeded randomness
- Store, supplier and item filtering
- Dashboard summaries, sortable table pages and date range presets
- A FastAPI service consumed by the orders dashboard
"""

__version__ = "1.0.0"
__author__ = "Order DataGen"
