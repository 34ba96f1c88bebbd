"""
Mflix API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn mflix_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│  Access Log  │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └──────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/movies  /api/movies/{id}/comments             │
    │  /api/theaters                  /health             │
    │                                                     │
    │  Exception Handlers (all render the Envelope):      │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Method→405    │  │
    │  │ Store→500      │ HTTP errors  │ Unexpected→500│  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the MongoDB client on app.state
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mflix_api import __version__
from mflix_api.config import settings
from mflix_api.database import close_client, create_client
from mflix_api.exceptions import (
    MethodNotAllowedError,
    MflixError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from mflix_api.middleware.logging import RequestLoggingMiddleware
from mflix_api.middleware.request_id import RequestIDMiddleware, current_request_id
from mflix_api.routes import comments, health, movies, theaters
from mflix_api.schemas.envelope import Envelope

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then one MongoDB client shared by all requests.
    Shutdown: close the client.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Mflix API %s starting up...", __version__)

    app.state.mongo_client = create_client()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Mflix API shutting down...")
    close_client(app.state.mongo_client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope_response(exc: MflixError) -> JSONResponse:
    envelope = Envelope.failure(exc.status_code, exc.message, exc.error)
    return envelope.to_response()


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to its envelope.

    Handler table:
        ValidationError         → 400
        RequestValidationError  → 400 (malformed JSON body)
        NotFoundError           → 404
        MethodNotAllowedError   → 405
        StoreError              → 500 (driver message in `error`)
        StarletteHTTPException  → its own status (unknown path, unregistered verb)
        Exception (fallback)    → 500 (details logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = current_request_id()
        logger.warning("[%s] Validation error: %s (%s)", rid, exc.message, exc.context)
        return _envelope_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_body_validation_error(request: Request, exc: RequestValidationError):
        rid = current_request_id()
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        )
        logger.warning("[%s] Invalid request body: %s", rid, details)
        return Envelope.failure(400, "Invalid request body", details or "Malformed request").to_response()

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _envelope_response(exc)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        rid = current_request_id()
        logger.info("[%s] %s %s is not supported", rid, exc.method, request.url.path)
        return _envelope_response(exc)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = current_request_id()
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.detail, exc.context)
        return _envelope_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        """Framework-level errors: unknown paths and verbs no route registered."""
        if exc.status_code == 405:
            envelope = Envelope.method_not_allowed(request.method)
        else:
            message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
            envelope = Envelope.failure(exc.status_code, message, message)
        return envelope.to_response(headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Last resort. The traceback is logged server-side only."""
        rid = current_request_id()
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return Envelope.failure(
            500, "Internal Server Error", "An unexpected error occurred"
        ).to_response()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Mflix API",
        description=(
            "REST API over the sample_mflix MongoDB database: movies, "
            "their comments, and theaters."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(movies.router)
    app.include_router(comments.router)
    app.include_router(theaters.router)
    app.include_router(health.router)

    return app


# uvicorn expects `mflix_api.main:app` to be importable
app = create_app()
