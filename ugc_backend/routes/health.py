"""
UGC Agency Backend — Health Check Route
=========================================

What:  Liveness/readiness check for Docker, load balancers and uptime checks.
How:   Runs `SELECT 1` through the app's Database handle.

Status levels:
    ok        database reachable (HTTP 200)
    degraded  database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status

from ugc_backend import __version__
from ugc_backend.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: set once at import, reported as uptime
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "ok"
    try:
        await request.app.state.db.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "degraded"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
