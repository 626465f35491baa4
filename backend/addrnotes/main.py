"""
AddrNotes Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn addrnotes.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  POST /api/notes   POST /api/notes/read             │
    │  POST /api/notes/delete   GET /api/notes            │
    │  GET /health                                        │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Storage→500        │
    │  (all 500 when LEGACY_STATUS_CODES is set)          │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from addrnotes import __version__
from addrnotes.config import settings
from addrnotes.database import dispose_engine
from addrnotes.exceptions import (
    AddrNotesError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from addrnotes.middleware.logging import RequestLoggingMiddleware
from addrnotes.middleware.request_id import RequestIDMiddleware, request_id_var
from addrnotes.routes import health, notes

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
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and announce the storage backend.
    Shutdown: dispose the database engine (close all pooled connections).

    The schema itself is managed by Alembic (`alembic upgrade head`).
    """
    setup_logging()
    logger.info("AddrNotes Backend %s starting up...", __version__)
    logger.info("Storage backend: %s", settings.database_url.split("://", 1)[0])
    if settings.legacy_status_codes:
        logger.info("Legacy status codes enabled: every error maps to HTTP 500")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield  # Application runs here

    logger.info("AddrNotes Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI, legacy_status_codes: bool = False) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError        → 400 Bad Request (client can fix the input)
        RequestValidationError → 400 (body is not a JSON object)
        NotFoundError          → 404 Not Found
        StorageError           → 500 Internal Server Error
        AddrNotesError         → 500 (catch-all for custom errors)
        Exception              → 500 (unexpected errors)

    Every error is logged before its response is built. With
    `legacy_status_codes` every status above becomes 500.
    """

    def status(code: int) -> int:
        return 500 if legacy_status_codes else code

    def error_body(error: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        }
        if details:
            body["details"] = details
        return body

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input; the message says which field and how to fix it."""
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=status(400),
            content=error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError):
        """Body is not JSON, or is JSON but not an object."""
        error_types = sorted({err.get("type", "unknown") for err in exc.errors()})
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), error_types)
        return JSONResponse(
            status_code=status(400),
            content=error_body(
                "validation_error",
                "The request body must be a JSON object.",
                {"errors": error_types},
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.warning("[%s] Not found: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=status(404),
            content=error_body("not_found", exc.message, {"addr": exc.addr}),
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Generic message to the client; context is logged server-side only."""
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("storage_error", exc.message),
        )

    @app.exception_handler(AddrNotesError)
    async def handle_app_error(request: Request, exc: AddrNotesError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged server-side only, never returned."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(legacy_status_codes: Optional[bool] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        legacy_status_codes: overrides settings.legacy_status_codes (tests
                             build one app per mode with this)
    """
    if legacy_status_codes is None:
        legacy_status_codes = settings.legacy_status_codes

    app = FastAPI(
        title="AddrNotes API",
        description=(
            "Notes keyed by Base58 address: create or update, read, delete and "
            "list notes carrying a cost, a value and a status."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
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

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, legacy_status_codes=legacy_status_codes)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `addrnotes.main:app` to be importable
app = create_app()
