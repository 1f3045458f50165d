"""
Wedding Invitations Backend — FastAPI Application Factory
===========================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware:  Request ID → Logging → GZip → CORS        │
    │                                                         │
    │  Routes:                                                │
    │    /api/auth/*   /api/invitations/*   /api/confirmations/*
    │    /api/debug/* (opt-in)   /health   /docs   /api-docs-json
    │                                                         │
    │  Exception Handlers:                                    │
    │    WeddingInvitationError → its status_code             │
    │    RequestValidationError → 400                         │
    │    Exception              → 500                         │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, report configuration problems
    Shutdown:  dispose the database engine
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
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import ConflictError, WeddingInvitationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, confirmations, debug, health, invitations

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-12-25T10:00:00 [INFO] app.services.auth_service: User registered: ...
    Output goes to stdout so container runtimes collect it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement/connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Wedding Invitations Backend %s starting up...", __version__)

    # Reported, not fatal: /health and /docs stay reachable so the
    # misconfiguration is visible from outside.
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if settings.enable_debug_routes:
        logger.warning("Debug routes are enabled under /api/debug")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Wedding Invitations Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(message: str, error: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """The error envelope; `data` is included only when there is some."""
    body: Dict[str, Any] = {
        "status": "error",
        "message": message,
        "error": error,
        "request_id": request_id_var.get(""),
    }
    if data is not None:
        body["data"] = data
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

    Handler hierarchy:
        WeddingInvitationError (and subclasses) → exc.status_code
        RequestValidationError                  → 400 (missing fields, bad JSON, bad UUID)
        StarletteHTTPException                  → its own status (404 for unknown paths)
        Exception                               → 500

    Context dicts and stack traces are logged, never returned.
    """

    @app.exception_handler(WeddingInvitationError)
    async def handle_app_error(request: Request, exc: WeddingInvitationError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        data = exc.data if isinstance(exc, ConflictError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.error_code, data),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Pydantic rejected the body, a path parameter or a query parameter."""
        errors = exc.errors()
        fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in errors]
        fields = [f for f in fields if f]
        message = "Invalid request: " + ", ".join(fields) if fields else "Invalid request payload"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=error_body(message, "validation_error"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "An unexpected error occurred. Please try again or contact support.",
                "internal_server_error",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Wedding Invitations API",
        description=(
            "Digital wedding invitations: couples create invitations, guests RSVP "
            "without an account, and door staff check guests in by scanning the "
            "QR payload issued with each confirmation."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/api-docs-json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins.strip() != "*",
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(invitations.router)
    app.include_router(confirmations.router)
    app.include_router(health.router)
    if settings.enable_debug_routes:
        app.include_router(debug.router)

    return app


app = create_app()
