"""Trendkart Schemas - Pydantic request/response models."""

from trendkart.schemas.alert import AlertListResponse
from trendkart.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ScoreHistoryResponse,
)

__all__ = [
    # Product
    "ProductCreate",
    "ProductUpdate",
    "ScoreHistoryResponse",
    # Alert
    "AlertListResponse",
]
