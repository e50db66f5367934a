"""Trendkart Models - Domain records."""

from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product
from trendkart.models.signal import NormalizedSignals, RawSignals

__all__ = [
    "Product",
    "Alert",
    "AlertType",
    "RawSignals",
    "NormalizedSignals",
]
