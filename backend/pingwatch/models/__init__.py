"""Database models."""
from .ping_result import PingResult

__all__ = ["PingResult"]
