"""
CarLookup Backend: Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Load balancers and container orchestrators need to know whether this
       instance can serve traffic, which requires a reachable database.
How:   Runs SELECT 1 through the application's engine.
Who:   Docker health checks, load balancers, monitoring. Unauthenticated.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status

from carlookup import __version__
from carlookup.database import Database
from carlookup.dependencies import get_database
from carlookup.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    # Health probes must answer, not raise; the failure is the answer
    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
