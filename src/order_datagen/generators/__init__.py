"""
Order generation package.

Exposes the deterministic purchase order generator and its date helpers.
"""

from .order_generator import coerce_date, generate_orders, iter_days

__all__ = ["generate_orders", "coerce_date", "iter_days"]
