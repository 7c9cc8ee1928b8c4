"""
Health Check Router

Provides service health and status endpoints.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from yt2mp3 import __version__
from yt2mp3.models.common import HealthResponse, ServiceInfoResponse
from yt2mp3.routers.deps import enforce_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/api/health",
    response_model=HealthResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


@router.get("/", response_model=ServiceInfoResponse)
async def root():
    """Root endpoint - returns basic service info."""
    return ServiceInfoResponse(
        service="yt2mp3 API",
        version=__version__,
        docs="/docs",
    )
