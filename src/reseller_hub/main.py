import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core.database import Database
from .core.logging_config import configure_logging
from .features.auth.router import router as auth_router
from .features.analytics.router import router as analytics_router
from .features.stores.router import router as stores_router
from .features.dashboard.router import router as dashboard_router

configure_logging()
logger = logging.getLogger("reseller_hub.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database pool on startup and closes it on shutdown. The pool
    lives on ``app.state.database`` so handlers get it injected per request.
    """
    logger.info("Starting application...")
    database: Database = app.state.database
    await database.connect()

    yield

    await database.disconnect()


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="Reseller Hub API",
        description="Storefront analytics and settings for resellers.",
        version="0.1.0",
        exception_handlers=tortoise_exception_handlers(),
        lifespan=lifespan,
    )
    app.state.database = database or Database()

    @app.get("/")
    async def read_root(request: Request):
        """
        Root endpoint for the API.
        """
        client_host = request.client.host if request.client else "unknown client"
        logger.info(f"Root endpoint '/' accessed by {client_host}")
        return {"message": "Welcome to the Reseller Hub API!"}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(analytics_router, prefix="/api/v1")
    app.include_router(stores_router, prefix="/api/v1")
    app.include_router(dashboard_router)
    return app


app = create_app()
