"""
UGC Agency Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error mapping
       and lifecycle management in one place.
How:   create_app(database=None) returns a configured FastAPI instance; the
       Database handle is stored on app.state.db and read by every request's
       session dependency. Tests pass their own in-memory database.
Who:   uvicorn (`uvicorn ugc_backend.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Access log → GZip → CORS      │
    │                                                          │
    │  Routes:      /api/auth  /api/campaigns  /api/clients    │
    │               /api/creators  /api/media  /api/messages   │
    │               /api/organizations  /api/users             │
    │               /api/dashboard  /api/email  /api/drive     │
    │               /health                                    │
    │                                                          │
    │  Errors:      UGCPlatformError → its status_code         │
    │               RequestValidationError → 400               │
    │               unknown route → 404, anything else → 500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, production config check, storage directory
    Shutdown: dispose the database engine
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ugc_backend import __version__
from ugc_backend.config import settings
from ugc_backend.database import Database
from ugc_backend.exceptions import AuthenticationError, UGCPlatformError
from ugc_backend.middleware import RequestIDMiddleware, RequestLoggingMiddleware, request_id_var
from ugc_backend.routes import (
    auth,
    campaigns,
    clients,
    creators,
    dashboard,
    drive,
    email,
    health,
    media,
    messages,
    organizations,
    users,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: `2026-03-14T12:00:00 [INFO] ugc_backend.services.auth_service: ...`
    Everything goes to stdout, where Docker and systemd collect it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("UGC Agency Backend %s starting (%s)", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving so /health can report; the log is the alarm
        logger.error("Configuration error: %s", str(e))

    storage = Path(settings.storage_root)
    storage.mkdir(parents=True, exist_ok=True)
    logger.info("Storage directory: %s", storage.resolve())
    logger.info("Server ready at http://%s:%d (docs at /docs)", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("UGC Agency Backend shutting down...")
    await app.state.db.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the ContextVar is reset
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_body(request: Request, message: str, code: str, details: Optional[dict] = None) -> dict:
    return {
        "error": message,
        "code": code,
        "details": details or None,
        "request_id": _request_id(request),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the `{error, code, details, request_id}` body.

    Handler hierarchy:
        UGCPlatformError (all subclasses)  → exc.status_code
        RequestValidationError             → 400 (schema errors are client errors)
        StarletteHTTPException             → its status ("Not found" for 404)
        SQLAlchemyError                    → 500, generic message
        Exception (fallback)               → 500, stack only in development
    """

    @app.exception_handler(UGCPlatformError)
    async def handle_platform_error(request: Request, exc: UGCPlatformError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            # Server-side context stays in the log
            content = _error_body(request, exc.message, exc.code)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            content = _error_body(request, exc.message, exc.code, exc.context)

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
            for e in exc.errors()
        ]
        logger.info("[%s] Request validation failed: %s", _request_id(request), errors)
        return JSONResponse(
            status_code=400,
            content=_error_body(request, "Invalid request", "validation_error", {"errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message, code = "Not found", "not_found"
        else:
            message, code = str(exc.detail), "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, message, code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("[%s] Database error: %s", _request_id(request), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, "A database error occurred. Please try again later.", "server_error"
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True)
        content = _error_body(request, "Internal server error", "internal_server_error")
        if settings.is_development:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=content)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Assemble the application.

    Args:
        database: The Database handle requests will use. Defaults to one
                  built from DATABASE_URL; no connection is opened until the
                  first request.
    """
    app = FastAPI(
        title="UGC Agency API",
        description=(
            "Backend for a UGC marketing agency: organizations, clients, campaigns, "
            "creator orders, media review and campaign messaging."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.db = database or Database()

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(campaigns.router)
    app.include_router(clients.router)
    app.include_router(creators.router)
    app.include_router(media.router)
    app.include_router(messages.router)
    app.include_router(organizations.router)
    app.include_router(users.router)
    app.include_router(email.router)
    app.include_router(drive.router)

    return app


# uvicorn entry point: `uvicorn ugc_backend.main:app`
app = create_app()
