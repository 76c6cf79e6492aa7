"""
SiteCMS Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn sitecms.main:app` or `python -m sitecms`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │   /api/login  /api/users  /api/services  /api/team  │
    │   /api/upload  /api/uploads  /uploads/*  /health    │
    │   /  (built frontend, production mode only)         │
    │                                                     │
    │  Exception Handlers:                                │
    │   Validation→400  Auth→401  NotFound→404            │
    │   Upload→400/500  Storage→500  Unexpected→500       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the upload directory
    3. Schema manager: create tables, add missing optional columns
    4. Seed loader: admin account, default services, default team

    Shutdown:
    1. Dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from sitecms import __version__
from sitecms.config import settings
from sitecms.database import async_session_factory, dispose_engine, engine
from sitecms.exceptions import (
    AuthError,
    NotFoundError,
    SiteCMSError,
    StorageError,
    UploadError,
    ValidationError,
)
from sitecms.middleware.logging import RequestLoggingMiddleware
from sitecms.middleware.request_id import RequestIDMiddleware, request_id_var
from sitecms.routes import auth, health, services, team, uploads, users
from sitecms.services.file_service import get_file_service
from sitecms.services.schema_service import ensure_schema
from sitecms.services.seed_service import seed_defaults

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("SiteCMS Backend %s starting up (%s mode)...", __version__, settings.app_env)

    upload_dir = get_file_service().ensure_upload_dir()
    logger.info("Upload directory: %s", upload_dir)

    added = await ensure_schema(engine)
    if added:
        logger.info("Schema migrated: %s", ", ".join(f"{t}.{c}" for t, c in added))

    report = await seed_defaults(async_session_factory)
    logger.info(
        "Seeding done: admin_created=%s services=%d team=%d",
        report.admin_created,
        report.services_seeded,
        report.team_seeded,
    )

    logger.info("Server running on http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("SiteCMS Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(exc: SiteCMSError, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": exc.error_code,
            "message": exc.message,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError  → 400 (duplicate username, bad upload path)
        AuthError        → 401 (credential mismatch, generic message)
        NotFoundError    → 404 (uploaded file missing)
        UploadError      → 400 no file / 500 write failure
        StorageError     → 500 (generic message, details logged)
        SiteCMSError     → its own status_code (subclasses without a handler)
        Exception        → 500 (unexpected errors)

    Response bodies never include stack traces, SQL or filesystem paths.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc, 400)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        return _error_response(exc, 401)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(exc, 404)

    @app.exception_handler(UploadError)
    async def handle_upload_error(request: Request, exc: UploadError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] Upload error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(exc, exc.status_code)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error_response(exc, 500)

    # Fallback for SiteCMSError subclasses without a handler of their own
    @app.exception_handler(SiteCMSError)
    async def handle_app_error(request: Request, exc: SiteCMSError):
        logger.error(
            "[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error_response(exc, exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Frontend Serving
# ══════════════════════════════════════════════════════════════════════════

def mount_frontend(app: FastAPI) -> None:
    """
    Production: serve the built frontend from settings.static_dir at "/".
    Development: nothing to mount; the asset bundler serves the frontend.

    Mounted last so every API and upload route takes precedence.
    """
    if not settings.is_production:
        logger.debug("Development mode: frontend is served by the asset bundler")
        return

    static_dir = Path(settings.static_dir)
    if not static_dir.is_dir():
        logger.warning("Static directory %s not found; frontend not served", static_dir.resolve())
        return

    app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="frontend")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The upload directory is created here as well as in the lifespan, so an
    app driven without lifespan events (e.g. by a test transport) can still
    store and serve files.
    """
    app = FastAPI(
        title="SiteCMS API",
        description="Content management backend for the marketing website.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    get_file_service().ensure_upload_dir()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
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
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # Upload routes first, matching the order the admin panel relies on
    app.include_router(uploads.router)
    app.include_router(uploads.files_router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(services.router)
    app.include_router(team.router)
    app.include_router(health.router)

    mount_frontend(app)

    return app


# uvicorn expects `sitecms.main:app` to be importable
app = create_app()
