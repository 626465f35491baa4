"""
AddrNotes Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks the note store for a trivial round trip and reports uptime.

Status levels:
    - healthy:   storage reachable (HTTP 200)
    - unhealthy: storage unreachable (HTTP 503, stop routing traffic)
"""

import time

from fastapi import APIRouter, Depends, Response

from addrnotes import __version__
from addrnotes.dependencies import get_note_store
from addrnotes.schemas.note import HealthResponse
from addrnotes.services.store_base import NoteStore

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> HealthResponse:
    if await store.health_check():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
