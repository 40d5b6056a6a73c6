"""Database connection lifecycle.

The :class:`Database` object owns the Tortoise-ORM connection pool. It is
created once per process, opened in the application lifespan and stored on
``app.state``; request handlers receive a connection through
:func:`get_db_connection` instead of reaching for a module global.
"""
import logging
from typing import Any, Optional

from fastapi import Request
from tortoise import Tortoise, connections
from tortoise.backends.base.client import BaseDBAsyncClient

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

MODEL_MODULES = [
    "reseller_hub.features.auth.models",
    "reseller_hub.features.catalog.models",
    "reseller_hub.features.orders.models",
    "reseller_hub.features.stores.models",
    "aerich.models",  # For Aerich migrations
]


def build_tortoise_config(db_url: str = DATABASE_URL) -> dict[str, Any]:
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


# Picked up by aerich, see [tool.aerich] in pyproject.toml
TORTOISE_ORM_CONFIG = build_tortoise_config()


class Database:
    def __init__(self, config: Optional[dict[str, Any]] = None):
        self.config = config if config is not None else TORTOISE_ORM_CONFIG
        self.connected = False

    async def connect(self, generate_schemas: bool = False) -> None:
        await Tortoise.init(config=self.config)
        if generate_schemas:
            await Tortoise.generate_schemas(safe=True)
        self.connected = True
        logger.info("Tortoise-ORM has been initialized.")

    async def disconnect(self) -> None:
        await Tortoise.close_connections()
        self.connected = False
        logger.info("Tortoise-ORM connections have been closed.")

    def connection(self, name: str = "default") -> BaseDBAsyncClient:
        if not self.connected:
            raise RuntimeError("Database is not connected.")
        return connections.get(name)


async def get_db_connection(request: Request) -> BaseDBAsyncClient:
    """FastAPI dependency yielding the default connection of the app's pool."""
    database: Database = request.app.state.database
    return database.connection()
