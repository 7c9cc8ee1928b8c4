"""Pydantic models for API requests and responses."""

from yt2mp3.models.media import (
    MediaRequest,
    VideoInfoResponse,
)
from yt2mp3.models.common import (
    HealthResponse,
    ErrorResponse,
    ServiceInfoResponse,
)

__all__ = [
    # Media
    "MediaRequest",
    "VideoInfoResponse",
    # Common
    "HealthResponse",
    "ErrorResponse",
    "ServiceInfoResponse",
]
