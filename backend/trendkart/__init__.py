"""Trendkart - Product trend scoring, featured picks and inventory alerts."""

__version__ = "0.1.0"
