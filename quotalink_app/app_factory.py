"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from quotalink_app.api.middleware import LoggingMiddleware
from quotalink_app.api.v1 import maintenance, owners, redirect, urls
from quotalink_app.config import settings
from quotalink_app.notifications.factory import NotificationFactory
from quotalink_app.services.shortener_engine import ShortenerEngine
from quotalink_app.storage.strategies import InMemoryRecordStore

logger = logging.getLogger(__name__)


def build_engine() -> ShortenerEngine:
    """Wire a fresh store, notifier and strategy from settings"""
    return ShortenerEngine(
        store=InMemoryRecordStore(),
        notifier=NotificationFactory.create(),
        sweep_interval=settings.sweep_interval_seconds,
    )


def create_app(
    engine: Optional[ShortenerEngine] = None,
    start_sweeper: Optional[bool] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        engine: Engine to serve (a new one is built from settings if None)
        start_sweeper: Run the background sweep while the app is up
            (default: settings.sweeper_enabled)

    Returns:
        Configured app
    """
    engine = engine or build_engine()
    if start_sweeper is None:
        start_sweeper = settings.sweeper_enabled

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_sweeper:
            engine.start()
        try:
            yield
        finally:
            if start_sweeper:
                engine.shutdown(settings.sweep_shutdown_timeout_seconds)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="URL shortener with click quotas and expiring links",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.engine = engine

    app.add_middleware(LoggingMiddleware)

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "sweeper_running": engine.sweeper.running,
        }

    ######## Include routers
    app.include_router(urls.router, prefix="/api/v1")
    app.include_router(owners.router, prefix="/api/v1")
    app.include_router(maintenance.router, prefix="/api/v1")
    # Catch-all /{alias} must come last
    app.include_router(redirect.router)

    return app
