"""Common request/response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Current server time (ISO-8601, UTC)")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error message")


class ServiceInfoResponse(BaseModel):
    """Root endpoint response."""
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    docs: str = Field(default="/docs", description="Interactive docs path")
