"""Prober service - measures round-trip latency to a container."""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..errors import ResolutionError
from .docker_cli import DockerCLI, run_command

logger = logging.getLogger(__name__)

# Extra time allowed for the ping process itself beyond its -W timeout
PROCESS_GRACE_SECONDS = 1


@dataclass
class ProbeResult:
    """Result of probing one container."""
    container_id: str
    success: bool
    ip_address: Optional[str] = None
    ping_time_ms: Optional[float] = None
    details: Optional[str] = None


class ProberService:
    """Resolves a container's address and sends it a single ICMP echo."""

    def __init__(
        self,
        docker: DockerCLI,
        ping_bin: str = "ping",
        timeout_seconds: int = 1,
        process_timeout: Optional[float] = None,
    ):
        self.docker = docker
        self.ping_bin = ping_bin
        self.timeout_seconds = timeout_seconds
        # Hard limit on the ping process; a hung process is killed after it
        if process_timeout is None:
            process_timeout = timeout_seconds + PROCESS_GRACE_SECONDS
        self.process_timeout = process_timeout

    async def probe(self, container_id: str) -> ProbeResult:
        """Probe one container. Never raises for per-container failures."""
        try:
            address = await self.docker.inspect_address(container_id)
        except ResolutionError as e:
            return ProbeResult(container_id=container_id, success=False, details=e.reason)

        return await self.ping(container_id, address)

    async def ping(self, container_id: str, address: str) -> ProbeResult:
        """Send exactly one ping and time it. No retries."""
        # -c 1: single echo request
        # -W: seconds to wait for the reply
        start = time.perf_counter()
        try:
            code, _, stderr = await run_command(
                self.ping_bin, "-c", "1", "-W", str(self.timeout_seconds), address,
                timeout=self.process_timeout,
            )
        except asyncio.TimeoutError:
            return ProbeResult(container_id=container_id, success=False, ip_address=address, details="Ping timeout")
        except OSError as e:
            return ProbeResult(container_id=container_id, success=False, ip_address=address, details=str(e))

        elapsed_ms = max((time.perf_counter() - start) * 1000, 0.0)

        if code != 0:
            return ProbeResult(
                container_id=container_id,
                success=False,
                ip_address=address,
                details=stderr.strip() or "No response",
            )

        return ProbeResult(
            container_id=container_id,
            success=True,
            ip_address=address,
            ping_time_ms=elapsed_ms,
        )
