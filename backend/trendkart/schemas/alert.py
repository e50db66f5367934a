"""
Trendkart - Alert Schemas
"""

from pydantic import BaseModel

from trendkart.models.alert import Alert


class AlertListResponse(BaseModel):
    """Alert list response, most recent first."""

    count: int
    data: list[Alert]
