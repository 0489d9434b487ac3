"""
RoomForge Backend — Health Check Routes
========================================

What:  Liveness banner at `/` and a health probe at `/health`.
Who:   Called by Docker health checks, load balancers and humans with curl.

Status levels:
    - healthy:   database answers SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from roomforge import __version__
from roomforge.database import engine, write_lock
from roomforge.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Service banner")
async def root() -> str:
    return "RoomForge API is running..."


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Probe the database and report aggregate status.

    The probe waits for the write lock like any other unit of work; the
    in-memory SQLite engine has a single connection that must not be reset
    underneath an open request transaction.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with write_lock:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
