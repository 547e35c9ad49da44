"""Services for container discovery, probing, storage and polling."""
from .docker_cli import DockerCLI
from .prober import ProberService, ProbeResult
from .store import ResultStore
from .poller import PollerService

__all__ = ["DockerCLI", "ProberService", "ProbeResult", "ResultStore", "PollerService"]
