"""Calk.KG calculation engine — loans, utility tariffs, benefits, currency rates."""

__version__ = "1.0.0"
