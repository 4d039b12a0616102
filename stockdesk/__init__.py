"""Inventory dashboard backend: products, suppliers, stock movements, orders and reports."""

__version__ = "1.0.0"
