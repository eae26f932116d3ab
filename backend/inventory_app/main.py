"""
Inventory Service — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) returns a configured app owning its own
       InventoryService, so two apps never share inventory state.
Who:   Called by the CLI launcher (cli.py) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /register    │ │ /inventory/… │ │ /search     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Method→405   │   │
    │  │ FileStorage→500 │ unmatched → 404/405 policy │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_app import __version__
from inventory_app.config import Settings
from inventory_app.exceptions import (
    FileStorageError,
    InventoryError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
)
from inventory_app.middleware.logging import RequestLoggingMiddleware
from inventory_app.middleware.request_id import RequestIDMiddleware, request_id_var
from inventory_app.routes import forms, inventory, search
from inventory_app.services.inventory_service import InventoryService
from inventory_app.services.photo_service import PhotoService
from inventory_app.services.route_policy import resolve_unmatched

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once at startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and report where photos go.
    Shutdown: log it. The inventory itself is simply dropped.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Inventory service %s starting up...", __version__)
    logger.info("Photo cache directory: %s", settings.cache_path)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info(
        "Inventory service shutting down (%d items discarded)",
        len(app.state.inventory_service),
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    exc: InventoryError,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": exc.message,
        "code": exc.code,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError             → 400
        RequestValidationError      → 400 (FastAPI's own input checks)
        NotFoundError               → 404
        MethodNotAllowedError       → 405
        HTTPException 404/405       → fallback policy (404 or 405)
        FileStorageError            → 500
        InventoryError (base)       → 500
        Exception (fallback)        → 500

    Every body carries a human-readable `error`; internal context is logged,
    never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        details = {"field": exc.field} if exc.field else None
        return _error_response(exc, details=details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(message="Invalid request data.")
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), exc.errors())
        return _error_response(error, details=jsonable_errors(exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(exc)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        return _error_response(exc, headers={"Allow": ", ".join(exc.allowed)})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level misses are settled by the allow-list policy."""
        if exc.status_code in (404, 405):
            error = resolve_unmatched(request.method, request.url.path)
            headers = None
            if isinstance(error, MethodNotAllowedError):
                headers = {"Allow": ", ".join(error.allowed)}
            return _error_response(error, headers=headers)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": str(exc.detail),
                "code": "http_error",
                "request_id": request_id_var.get(""),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error(
            "[%s] File storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(exc)

    @app.exception_handler(InventoryError)
    async def handle_inventory_error(request: Request, exc: InventoryError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred. Please try again.",
                "code": "internal_server_error",
                "request_id": rid,
            },
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    """FastAPI validation errors stripped to JSON-safe fields."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds a fresh PhotoService/InventoryService pair, creating the
    cache directory if needed (OSError propagates to the caller).
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Inventory API",
        description="Register, browse, update and delete inventory items with photos.",
        version=__version__,
        lifespan=lifespan,
    )

    photo_service = PhotoService(settings.cache_dir, max_size=settings.max_photo_size)
    app.state.settings = settings
    app.state.inventory_service = InventoryService(photo_service)

    # Middleware executes in reverse order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(forms.router)
    app.include_router(inventory.router)
    app.include_router(search.router)

    return app
