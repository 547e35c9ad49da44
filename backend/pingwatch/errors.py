"""Exceptions raised by PingWatch services."""


class PingWatchError(Exception):
    """Base class for PingWatch errors."""


class EnumerationError(PingWatchError):
    """The container runtime could not list running containers."""


class ResolutionError(PingWatchError):
    """A container's private network address could not be resolved."""

    def __init__(self, container_id: str, reason: str):
        super().__init__(f"Failed to get IP for container {container_id}: {reason}")
        self.container_id = container_id
        self.reason = reason


class StoreError(PingWatchError):
    """The result store could not be read or written."""
