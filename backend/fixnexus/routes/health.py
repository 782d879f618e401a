"""
FixNexus Backend: Root & Health Check Routes
==============================================

What:  GET / (plain-text liveness banner) and GET /health (dependency probe).
Who:   Uptime monitors, load balancers, and developers poking the server.

Status levels:
    - healthy:   MongoDB answered a ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 200, status field says so)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from fixnexus import __version__
from fixnexus.database import MongoDatabase, get_database
from fixnexus.schemas.documents import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "FixNexus Server is running...."


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(database: MongoDatabase = Depends(get_database)) -> HealthResponse:
    """Ping MongoDB (admin `ping` command) and report uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
