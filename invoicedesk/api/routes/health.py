"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from invoicedesk import __version__
from invoicedesk.api.dependencies import get_registry
from invoicedesk.application.dto.responses import HealthResponse, ProviderHealthResponse
from invoicedesk.application.services import DraftRegistry

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    registry: DraftRegistry = Depends(get_registry),
) -> HealthResponse:
    """Service status, uptime and number of open drafts."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        open_drafts=len(registry),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from invoicedesk.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=await pool.ping(),
        )
    except Exception as e:
        db_status = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
