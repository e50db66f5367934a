"""
Trendkart - Products API Endpoints

REST API for listing, creating and editing tracked products.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from trendkart.api.deps import get_store, require_admin
from trendkart.models.product import Product
from trendkart.schemas.product import ProductCreate, ProductUpdate, ScoreHistoryResponse
from trendkart.services.trend_store import TrendStore

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[Product])
async def list_products(
    region: Optional[str] = Query(None, description="Region filter; 'All' disables it"),
    sort: str = Query("score", description="Numeric field to sort by"),
    direction: str = Query("desc", alias="dir", description="asc or desc"),
    store: TrendStore = Depends(get_store),
):
    """
    List tracked products.

    Query parameters:
    - region: Only products in this region
    - sort: score, featured_score, price, inventory or reorder_point
    - dir: asc or desc (ties keep collection order)
    """
    return store.list_products(region=region, sort=sort, direction=direction)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: TrendStore = Depends(get_store)):
    """Get a single product."""
    return store.get_product(product_id)


@router.get("/{product_id}/history", response_model=ScoreHistoryResponse)
async def get_score_history(product_id: str, store: TrendStore = Depends(get_store)):
    """Recorded trend scores for a product, oldest first."""
    return ScoreHistoryResponse(
        product_id=product_id,
        scores=store.score_history(product_id),
    )


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_product(
    payload: ProductCreate,
    store: TrendStore = Depends(get_store),
):
    """Create a product. Only `name` is required."""
    return store.create_product(payload.model_dump(exclude_unset=True))


@router.patch(
    "/{product_id}",
    response_model=Product,
    dependencies=[Depends(require_admin)],
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    store: TrendStore = Depends(get_store),
):
    """Partially update a product."""
    return store.update_product(product_id, payload.model_dump(exclude_unset=True))
