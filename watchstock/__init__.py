"""Inventory tracking for watch products, components, orders and assembly, stored in LMDB and served over HTTP."""

__version__ = "0.1.0"