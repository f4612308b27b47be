"""
NeoLayer Store API — Health Check Route
========================================

What:  Liveness check at GET /api/health.
Why:   Load balancers and the storefront check that the process is up.
How:   Always answers 200; the database field reports a ping result but
       never turns the check into a failure.
"""

import logging
import time

from fastapi import APIRouter, Request

from store_api import __version__
from store_api.schemas.store import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

# Process start time for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "disconnected"
    store = getattr(request.app.state, "store", None)
    if store is not None and await store.ping():
        db_status = "connected"

    return HealthResponse(
        status="Server is running",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
