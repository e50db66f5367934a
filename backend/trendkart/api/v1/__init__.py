"""Trendkart API v1 - REST API endpoints."""

from fastapi import APIRouter

from trendkart.api.v1.products import router as products_router
from trendkart.api.v1.scheduler import router as scheduler_router
from trendkart.api.v1.trends import router as trends_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

# Include all routers
api_router.include_router(products_router)
api_router.include_router(trends_router)
api_router.include_router(scheduler_router)

__all__ = ["api_router"]
