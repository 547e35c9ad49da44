"""Poller service - periodically probes every running container.

Each cycle:
1. List running containers. If docker cannot be reached, skip to the sleep.
2. Probe each container in turn and store every successful measurement.
   Failed probes and failed writes are logged and dropped.
3. Sleep for the poll interval.

Cycles run back to back on a single task, so a slow cycle delays the next
one instead of overlapping it.
"""
import asyncio
import contextlib
import logging
from datetime import datetime
from typing import Optional

from ..errors import EnumerationError, StoreError
from .docker_cli import DockerCLI
from .prober import ProberService
from .store import ResultStore

logger = logging.getLogger(__name__)


class PollerService:
    """Background loop tying the enumerator, prober and store together."""

    def __init__(
        self,
        docker: DockerCLI,
        prober: ProberService,
        store: ResultStore,
        interval_seconds: float = 30,
    ):
        self.docker = docker
        self.prober = prober
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def run_cycle(self) -> int:
        """Run one enumerate/probe pass. Returns the number of rows stored."""
        try:
            container_ids = await self.docker.list_running()
        except EnumerationError as e:
            logger.error(f"Failed to get container list: {e}")
            return 0

        stored = 0
        for container_id in container_ids:
            result = await self.prober.probe(container_id)
            if not result.success:
                logger.warning(
                    f"Probe failed for container {container_id}"
                    f" ({result.ip_address or 'no address'}): {result.details}"
                )
                continue

            try:
                await self.store.insert(result.ip_address, result.ping_time_ms, datetime.utcnow())
            except StoreError as e:
                logger.error(str(e))
                continue

            stored += 1
            logger.debug(f"Container {container_id} ({result.ip_address}): {result.ping_time_ms:.2f}ms")

        logger.info(f"Poll cycle complete: {stored}/{len(container_ids)} containers recorded")
        return stored

    async def run(self):
        """Poll forever."""
        logger.info(f"Starting poller (interval={self.interval_seconds}s)")
        while True:
            try:
                await self.run_cycle()
            except Exception as e:
                logger.error(f"Poll cycle error: {e}")
            await asyncio.sleep(self.interval_seconds)

    def start(self):
        """Start the loop as a background task on the running event loop."""
        if self._task and not self._task.done():
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self):
        """Cancel the background task and wait for it to finish."""
        if self._task:
            task, self._task = self._task, None
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            logger.info("Poller stopped")
