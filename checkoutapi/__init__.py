"""Checkout API - multi-buy pricing for point-of-sale checkout sessions."""

__version__ = "1.0.0"
