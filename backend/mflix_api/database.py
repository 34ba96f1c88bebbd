"""
Mflix API - Document Store Connection Management
=================================================

What:  Motor client lifecycle and the FastAPI dependency that hands a Store
       to route handlers.
How:   The lifespan handler calls `create_client()` once at startup and keeps
       the client on `app.state`; `get_store()` wraps the configured database
       in a MongoStore for each request; `close_client()` runs at shutdown.
Who:   Used by main.py (lifespan) and by route dependencies.

Connection Pooling:
    maxPoolSize:               upper bound on concurrent connections (shared)
    serverSelectionTimeoutMS:  how long an operation waits for a reachable server
    connectTimeoutMS:          TCP connect timeout
    tz_aware:                  datetimes are decoded as UTC-aware, matching
                               what the document models write

    Motor connects lazily: creating the client does not open a socket, so
    startup succeeds even when MongoDB is down. The first query, or the health
    check, surfaces the failure.
"""

import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from mflix_api import __version__
from mflix_api.config import settings
from mflix_api.services.mongo_store import MongoStore
from mflix_api.services.store_base import Store

logger = logging.getLogger(__name__)


# ── Client Lifecycle ──────────────────────────────────────────────────────
def create_client() -> AsyncIOMotorClient:
    """
    Build the process-wide Motor client from settings.

    When:  Called once during application startup (lifespan handler).
    """
    client = AsyncIOMotorClient(
        settings.mongodb_uri,
        maxPoolSize=settings.mongodb_max_pool_size,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        connectTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
        appname=f"mflix-api/{__version__}",
    )
    logger.info(
        "MongoDB client created (database=%s, max_pool_size=%d)",
        settings.mongodb_database,
        settings.mongodb_max_pool_size,
    )
    return client


def close_client(client: AsyncIOMotorClient) -> None:
    """
    Close all pooled connections.

    When:  Called during application shutdown (lifespan handler).
    """
    client.close()
    logger.info("MongoDB client closed")


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> Store:
    """
    FastAPI dependency that provides the Store for the current request.

    Tests replace it through `app.dependency_overrides[get_store]`.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(store: Store = Depends(get_store)):
            ...
    """
    client: AsyncIOMotorClient = request.app.state.mongo_client
    return MongoStore(client[settings.mongodb_database])
