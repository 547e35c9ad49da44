"""Pydantic schemas for API response models."""
from .ping_result import (
    PingResultResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "PingResultResponse",
    "ErrorResponse",
    "HealthResponse",
]
