"""Rebuild market-by-price snapshots from market-by-order messages."""

__version__ = "0.1.0"
__all__ = ["models", "orderbook", "cli"]