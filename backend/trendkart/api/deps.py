"""
Trendkart - API Dependencies

FastAPI dependency injection for the store, scheduler and admin gating.
"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from trendkart.core.config import Settings, settings as default_settings
from trendkart.services.cycle_scheduler import CycleScheduler
from trendkart.services.trend_store import TrendStore


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", default_settings)


def get_store(request: Request) -> TrendStore:
    return request.app.state.store


def get_scheduler(request: Request) -> CycleScheduler:
    return request.app.state.scheduler


async def require_admin(
    request: Request,
    app_settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Require the shared admin key for mutating endpoints.

    Raises:
        HTTPException 401: If the key header is missing or wrong
    """
    provided: Optional[str] = request.headers.get(app_settings.api_key_header)
    if not provided or not secrets.compare_digest(provided, app_settings.admin_api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized",
        )
