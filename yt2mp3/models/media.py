"""Video info and conversion request/response models."""

from typing import Optional
from pydantic import BaseModel, Field


class MediaRequest(BaseModel):
    """Body shared by /api/info and /api/convert."""
    url: str = Field(..., description="YouTube video URL", max_length=2048)


class VideoInfoResponse(BaseModel):
    """Video metadata returned by /api/info."""
    title: str = Field(..., description="Video title")
    duration: int = Field(..., ge=0, description="Duration in seconds")
    thumbnail: Optional[str] = Field(default=None, description="Thumbnail URL")
    channel: Optional[str] = Field(default=None, description="Channel name, or uploader")
