"""Ping result schemas for API."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class PingResultResponse(BaseModel):
    """Schema for a stored probe result."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    ip_address: str
    ping_time: float  # milliseconds
    last_seen: datetime


class ErrorResponse(BaseModel):
    """Generic error body."""
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
