"""
RoomForge Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn roomforge.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Rate Limit  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/rooms   │ │ /api/bookings│ │ / , /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Conflict→409 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create tables → seed demo data
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from roomforge import __version__
from roomforge.config import settings
from roomforge.database import async_session_factory, dispose_engine, init_models
from roomforge.exceptions import RoomForgeError
from roomforge.middleware.logging import RequestLoggingMiddleware
from roomforge.middleware.rate_limit import RateLimitMiddleware
from roomforge.middleware.request_id import request_id_var, RequestIDMiddleware
from roomforge.routes import bookings, health, rooms
from roomforge.schemas.common import ErrorResponse
from roomforge.services.seed import seed_demo_data

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure application-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout,
    level from LOG_LEVEL. Called once at startup before anything logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def prepare_database() -> None:
    """Create tables and load the demo catalog, as configured."""
    if settings.create_tables_on_startup:
        await init_models()
        logger.info("Database tables ready")

    if settings.seed_demo_data:
        async with async_session_factory() as session:
            async with session.begin():
                await seed_demo_data(session)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("RoomForge Backend %s starting up...", __version__)

    if settings.is_in_memory_database:
        logger.warning("Using in-memory SQLite: rooms and bookings are lost on restart")

    await prepare_database()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("RoomForge Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Flattens FastAPI/pydantic errors into JSON-safe {field, message} pairs."""
    described = []
    for err in exc.errors():
        # loc starts with "body"/"query"/"path"
        loc = [str(part) for part in err.get("loc", ())[1:]]
        described.append({
            "field": ".".join(loc) or None,
            "message": err.get("msg", "Invalid value"),
        })
    return described


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Builds the {error, message, details, request_id} body every failure shares."""
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    RequestValidationError (schema failures) → 400 validation_error
    RoomForgeError and subclasses             → exc.status_code / exc.error_code
    Exception                                 → 500 internal_server_error

    Client errors (4xx) return the exception's context as `details`. Server
    errors return a generic message; the context only goes to the log.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = _describe_validation_errors(exc)
        summary = "; ".join(
            f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors
        )
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), summary)
        return error_response(
            400,
            "validation_error",
            f"Invalid request: {summary}" if summary else "Invalid request",
            {"errors": errors},
        )

    @app.exception_handler(RoomForgeError)
    async def handle_app_error(request: Request, exc: RoomForgeError):
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                request_id_var.get(""), type(exc).__name__, exc.message, exc.context,
            )
            return error_response(
                exc.status_code,
                exc.error_code,
                "An internal error occurred. Please try again later.",
            )
        return error_response(exc.status_code, exc.error_code, exc.message, exc.context)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), exc, exc_info=True)
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition, so the order below
    (CORS → GZip → Logging → RequestID → RateLimit) runs as
    RateLimit → RequestID → Logging → GZip → CORS.
    """
    app = FastAPI(
        title="RoomForge API",
        description=(
            "Meeting room catalog and booking service. Bookings of the same room "
            "can never overlap; touching intervals (10:00-11:00 after 09:00-10:00) are allowed."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentialed responses with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(rooms.router)
    app.include_router(bookings.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
