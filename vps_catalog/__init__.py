"""Aggregates VPS plans from provider APIs into one validated catalog."""

__version__ = "1.0.0"
