"""
NeoLayer Store API — Storage Connector
=======================================

What:  One long-lived MongoDB client plus handles to the three collections.
Why:   Centralizes all connection logic and keeps collections out of module
       globals: the startup phase builds a StoreContext, routes receive it
       through the get_store() dependency.
How:   connect_store() opens a pymongo AsyncMongoClient and pings the server;
       initialize_store() adds the settings bootstrap on top. Both run inside
       the FastAPI lifespan, before any route is served.
When:  Once at process start; the context lives until shutdown.

Failure policy:
    Any error while connecting or seeding raises StorageUnavailableError.
    The lifespan lets it propagate, uvicorn aborts startup and the process
    exits with a non-zero status. There is no retry and no degraded mode.
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from store_api.config import Settings
from store_api.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreContext:
    """
    Ready-to-serve storage handles.

    Frozen: the handles are assigned once during startup and never replaced.
    `client` is None when a context is assembled from bare collections (tests).
    """

    products: AsyncCollection
    orders: AsyncCollection
    settings: AsyncCollection
    client: Any = None

    async def ping(self) -> bool:
        """Lightweight reachability check used by the health route."""
        if self.client is None:
            return True
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Close the client and every pooled connection it owns."""
        if self.client is not None:
            await self.client.close()


async def connect_store(config: Settings) -> StoreContext:
    """
    Open the MongoDB connection and resolve the three collections.

    pymongo connects lazily, so a `ping` is issued to surface unreachable
    hosts and authentication failures here rather than on the first request.

    Raises:
        StorageUnavailableError: the server could not be reached or rejected us
    """
    client = None
    try:
        # Malformed URIs raise ConfigurationError/InvalidURI from the constructor
        client = AsyncMongoClient(
            config.mongodb_uri,
            serverSelectionTimeoutMS=config.mongodb_timeout_ms,
            appname="neolayer-store-api",
        )
        await client.admin.command("ping")
    except PyMongoError as e:
        if client is not None:
            await client.close()
        raise StorageUnavailableError(
            message=f"Could not connect to MongoDB: {e}",
            context={"database": config.mongodb_database},
        ) from e

    db = client[config.mongodb_database]
    logger.info("Connected to MongoDB database '%s'", config.mongodb_database)
    return StoreContext(
        products=db[config.products_collection],
        orders=db[config.orders_collection],
        settings=db[config.settings_collection],
        client=client,
    )


async def initialize_store(config: Settings) -> StoreContext:
    """
    Startup phase: connect, then make sure the settings document exists.

    Returns the StoreContext that the application serves from.
    """
    # Imported here: services import exceptions/documents, not the connector
    from store_api.services.settings_service import settings_service

    store = await connect_store(config)
    try:
        await settings_service.ensure_default_settings(store.settings)
    except Exception as e:
        await store.close()
        raise StorageUnavailableError(
            message=f"Could not initialize store settings: {e}",
        ) from e
    return store


def get_store(request: Request) -> StoreContext:
    """
    FastAPI dependency that provides the StoreContext built at startup.

    Raises:
        StorageUnavailableError: startup has not produced a context (→ 500)
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StorageUnavailableError()
    return store
