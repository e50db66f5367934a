"""
Trendkart - Product Model

Represents a product tracked by the trend cycle. Products are immutable
snapshots: admin edits and cycles publish new versions instead of mutating.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REGION = "Global"
ALL_REGIONS = "All"

# Product fields that may be used as a sort key
NUMERIC_FIELDS = ("score", "featured_score", "price", "inventory", "reorder_point")


class Product(BaseModel):
    """
    Product tracked by the platform.

    Attributes:
        id: Opaque unique identifier
        name: Product name (e.g., "Self-Stirring Mug")
        region: Market region (e.g., "Global", "India", "USA")
        price: Price in minor currency units
        inventory: Units in stock
        reorder_point: Inventory level at or below which a low-stock alert fires
        image: Optional image URL
        tags: Free-form hashtags
        score: Latest trend score, rounded (None until first cycle)
        featured_score: Latest velocity-boosted score, rounded
        updated_at: Last time an admin edit or cycle touched the product
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(..., min_length=1)
    region: str = DEFAULT_REGION
    price: float = 999
    inventory: int = 100
    reorder_point: int = 20
    image: str = ""
    tags: list[str] = Field(default_factory=list)

    score: Optional[float] = None
    featured_score: Optional[float] = None
    updated_at: Optional[datetime] = None

    @property
    def is_low_stock(self) -> bool:
        return self.inventory <= self.reorder_point

    def numeric(self, field: str) -> float:
        """Value of a numeric field for sorting; unscored products count as 0."""
        value = getattr(self, field)
        return 0.0 if value is None else float(value)
