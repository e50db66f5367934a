"""Trendkart Core - Configuration and errors."""

from trendkart.core.config import Settings, get_settings, settings
from trendkart.core.exceptions import NotFoundError, TrendkartError, ValidationError

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "TrendkartError",
    "ValidationError",
    "NotFoundError",
]
