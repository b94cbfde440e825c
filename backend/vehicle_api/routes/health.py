"""
Vehicle Registry Backend — Health Check Route
===============================================

What:  Health check endpoint for monitoring and container probes.
How:   Counts records through a short-lived session; reports connectivity,
       record count, token-verification mode and uptime.

Status levels:
    - healthy:   record store reachable
    - unhealthy: record store query failed (still HTTP 200 so the report
                 itself is readable)
"""

import logging
import time

from fastapi import APIRouter

from vehicle_api import __version__
from vehicle_api.config import settings
from vehicle_api.schemas.vehicle import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health of the service and its in-memory record store.",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"
    records = 0

    try:
        from vehicle_api.database import async_session_factory, init_models, schema_ready
        from vehicle_api.services.vehicle_service import vehicle_service

        if not schema_ready():
            await init_models()
        async with async_session_factory() as session:
            records = await vehicle_service.count(session)
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: record store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        records=records,
        auth_verification="enabled" if settings.auth_verify_tokens else "disabled",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
