"""
Trendkart - Alert Model

Alerts are append-only records. Only `resolved` ever changes, and only
through an explicit resolve.
"""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AlertType(str, enum.Enum):
    """Alert type enumeration."""

    RISING = "rising"
    FADING = "fading"
    LOW_INVENTORY = "low_inventory"


class Alert(BaseModel):
    """Alert raised by a feature transition or an inventory breach."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: AlertType
    product_id: str
    message: str
    created_at: datetime
    resolved: bool = False
