"""
NeoLayer Store API — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn store_api.main:app) or `python -m store_api`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  Request ID → Logging → GZip → CORS (any)   │
    │                                                          │
    │  Routes:                                                 │
    │   /api/products   /api/orders   /api/settings   /health  │
    │                                                          │
    │  Exception Handlers:                                     │
    │   ValidationError→400 │ NotFound→404 │ Storage*→500      │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup (explicit initialization phase):
    1. Initialize logging
    2. initialize_store(): connect to MongoDB, seed default settings
    3. Publish the StoreContext on app.state; only now are routes servable
    Any failure in step 2 is logged and re-raised; uvicorn aborts startup
    and the process exits with a non-zero status.

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from store_api import __version__
from store_api.config import Settings, settings
from store_api.database import StoreContext, initialize_store
from store_api.exceptions import (
    NotFoundError,
    StorageError,
    StorageUnavailableError,
    StoreError,
    ValidationError,
)
from store_api.middleware.logging import RequestLoggingMiddleware
from store_api.middleware.request_id import RequestIDMiddleware, request_id_var
from store_api.routes import health, orders, products
from store_api.routes import settings as settings_routes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-03-14T10:00:00 [INFO] store_api.services.order_service: ...
    Called once during startup, before the database connection is opened.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-operation chatter from the server and the driver
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(config: Settings):
    """Return a lifespan bound to `config` (tests pass their own Settings)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(config.log_level)
        logger.info("NeoLayer Store API %s starting up...", __version__)

        # An already-attached context (tests) skips the connection phase
        store: Optional[StoreContext] = getattr(app.state, "store", None)
        owns_store = store is None
        if owns_store:
            try:
                store = await initialize_store(config)
            except StorageUnavailableError as e:
                logger.critical("Failed to start server: %s", e.message)
                raise
            app.state.store = store

        logger.info("Server ready at http://%s:%d", config.host, config.port)

        yield

        logger.info("NeoLayer Store API shutting down...")
        if owns_store and store is not None:
            await store.close()
            app.state.store = None
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the error taxonomy onto HTTP status codes in one place.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        RequestValidationError   → 400 Bad Request (body is not a JSON object)
        NotFoundError            → 404 Not Found
        StorageUnavailableError  → 500 (collections not ready)
        StorageError             → 500 (driver message passed through)
        StoreError (base)        → 500
        Exception (fallback)     → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON or a non-object body; reported like our own 400s."""
        return _error_response(
            400,
            "validation_error",
            "Request body must be a JSON object",
            {"errors": [err.get("msg") for err in exc.errors()]},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(StorageUnavailableError)
    async def handle_storage_unavailable(request: Request, exc: StorageUnavailableError):
        logger.error("[%s] Storage unavailable: %s", request_id_var.get(""), exc.message)
        return _error_response(500, "storage_unavailable", exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, "storage_error", exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("[%s] Store error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(500, "internal_server_error", str(exc) or "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None, store: Optional[StoreContext] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the module singleton)
        store:  Pre-built StoreContext; when given, startup does not connect
    """
    config = config or settings
    app = FastAPI(
        title="NeoLayer Store API",
        description="Products, orders and store settings for the NeoLayer storefront.",
        version=__version__,
        lifespan=build_lifespan(config),
    )
    app.state.store = store

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(settings_routes.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run("store_api.main:app", host=settings.host, port=settings.port)


# uvicorn expects `store_api.main:app` to be importable
app = create_app()
