"""
Trendkart - FastAPI Application

Main entry point for the Trendkart API server.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trendkart.api.v1 import api_router
from trendkart.core.config import Settings, settings as default_settings
from trendkart.core.exceptions import NotFoundError, TrendkartError, ValidationError
from trendkart.services.cycle_scheduler import CycleScheduler
from trendkart.services.discord_notifier import DiscordNotifier
from trendkart.services.signal_sources import RandomSignalSource, SignalSource
from trendkart.services.trend_cycle import TrendCycle
from trendkart.services.trend_store import TrendStore, seed_demo_products

logger = logging.getLogger(__name__)

# Seconds to wait for queued Discord notifications on shutdown
NOTIFY_DRAIN_SECONDS = 5

ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
    )


def create_app(
    settings: Optional[Settings] = None,
    source: Optional[SignalSource] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings to use (default: environment settings)
        source: Signal source for the trend cycle (default: simulated)
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Builds the store and trend cycle on startup, stops the scheduler
        on shutdown.
        """
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")

        notifier = DiscordNotifier(settings.discord_webhook_url)
        notifier.bind(asyncio.get_running_loop())
        store = TrendStore.from_settings(
            settings,
            alert_listeners=[notifier] if notifier.enabled else None,
        )
        if settings.seed_demo_products:
            seed_demo_products(store)

        cycle = TrendCycle.from_settings(
            settings,
            store,
            source or RandomSignalSource.from_settings(settings),
        )
        scheduler = CycleScheduler(cycle, settings.cycle_interval_seconds)

        app.state.store = store
        app.state.scheduler = scheduler

        # First scores are available before the first interval elapses
        await run_in_threadpool(cycle.run)

        if settings.scheduler_enabled:
            scheduler.start()
        else:
            logger.info("Trend cycle scheduler disabled")

        yield

        logger.info("Shutting down...")
        if scheduler.is_running:
            scheduler.stop()
        if notifier.enabled:
            await run_in_threadpool(notifier.wait_idle, NOTIFY_DRAIN_SECONDS)

    app = FastAPI(
        title=settings.app_name,
        description="Trending product scores, featured picks and inventory alerts",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrendkartError)
    async def trendkart_exception_handler(request: Request, exc: TrendkartError):
        """Map domain errors to client-facing error kinds."""
        return JSONResponse(
            status_code=next(
                (code for kind, code in ERROR_STATUS if isinstance(exc, kind)), 500
            ),
            content={"error": exc.to_dict()},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies and params as validation errors."""
        error = ValidationError(
            "Invalid request",
            details={"errors": jsonable_encoder(exc.errors())},
        )
        return JSONResponse(status_code=400, content={"error": error.to_dict()})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": str(exc) if settings.debug else None,
                }
            },
        )

    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health_check():
        """
        Health check endpoint for load balancers and monitoring.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.get("/", tags=["root"])
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_base": "/api/v1",
            "endpoints": {
                "products": "/api/v1/products",
                "featured": "/api/v1/featured",
                "alerts": "/api/v1/alerts",
                "scheduler": "/api/v1/scheduler/status",
            },
        }

    return app


configure_logging(default_settings)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trendkart.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower(),
    )
