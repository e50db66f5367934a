"""
Trendkart - Trends API Endpoints

Featured products and alert stream.
"""

from fastapi import APIRouter, Depends, Query

from trendkart.api.deps import get_store, require_admin
from trendkart.models.alert import Alert
from trendkart.models.product import Product
from trendkart.schemas.alert import AlertListResponse
from trendkart.services.trend_store import TrendStore

router = APIRouter(tags=["trends"])


@router.get("/featured", response_model=list[Product])
async def list_featured(store: TrendStore = Depends(get_store)):
    """Products currently in the featured set."""
    return store.list_featured()


@router.get("/alerts", response_model=AlertListResponse)
async def list_alerts(
    only_active: bool = Query(True, description="Hide resolved alerts"),
    store: TrendStore = Depends(get_store),
):
    """Alerts, most recent first."""
    alerts = store.list_alerts(only_active=only_active)
    return AlertListResponse(count=len(alerts), data=alerts)


@router.post(
    "/alerts/{alert_id}/resolve",
    response_model=Alert,
    dependencies=[Depends(require_admin)],
)
async def resolve_alert(alert_id: str, store: TrendStore = Depends(get_store)):
    """Mark an alert resolved. Safe to call more than once."""
    return store.resolve_alert(alert_id)
