"""
Trendkart - Product Schemas

Pydantic schemas for product creation, partial updates and history.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from trendkart.models.product import DEFAULT_REGION


class ProductCreate(BaseModel):
    """
    Schema for creating a new Product.

    `name` is optional at the schema level so that a missing name surfaces
    as a store ValidationError rather than a framework parsing error.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, max_length=255, description="Product name")
    region: str = Field(DEFAULT_REGION, description="Market region")
    price: float = Field(999, ge=0)
    inventory: int = Field(100, ge=0)
    reorder_point: int = Field(20, ge=0)
    image: str = ""
    tags: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Schema for updating a Product (all fields optional)."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    region: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    inventory: Optional[int] = Field(None, ge=0)
    reorder_point: Optional[int] = Field(None, ge=0)
    image: Optional[str] = None
    tags: Optional[list[str]] = None


class ScoreHistoryResponse(BaseModel):
    """Recorded trend scores for a product, oldest first."""

    product_id: str
    scores: list[float]
