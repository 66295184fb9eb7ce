"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from armory import __version__
from armory.api.dependencies import get_app_settings
from armory.application.dto.responses import HealthResponse
from armory.config import Settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the configured storage backend.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        backend=settings.storage.backend,
    )
