"""Docker CLI client - lists running containers and resolves their addresses."""
import asyncio
import logging
from typing import List, Tuple

from ..errors import EnumerationError, ResolutionError

logger = logging.getLogger(__name__)


async def run_command(*args: str, timeout: float) -> Tuple[int, str, str]:
    """Run a command and return (returncode, stdout, stderr).

    Raises OSError if the executable is missing and asyncio.TimeoutError if
    the command does not finish in time. A timed out process is killed.
    """
    proc = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        raise
    return proc.returncode, stdout.decode(errors="replace"), stderr.decode(errors="replace")


class DockerCLI:
    """Thin wrapper around the local docker command line."""

    def __init__(self, docker_bin: str = "docker", timeout: float = 10):
        self.docker_bin = docker_bin
        self.timeout = timeout

    async def list_running(self) -> List[str]:
        """Return IDs of running containers, in the order docker reports them.

        An empty list means the call succeeded and nothing is running.
        """
        try:
            code, stdout, stderr = await run_command(
                self.docker_bin, "ps", "--format", "{{.ID}}",
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise EnumerationError("docker ps timed out")
        except OSError as e:
            raise EnumerationError(f"Cannot run {self.docker_bin}: {e}") from e

        if code != 0:
            raise EnumerationError(f"docker ps exited with {code}: {stderr.strip()}")

        return [line.strip() for line in stdout.splitlines() if line.strip()]

    async def inspect_address(self, container_id: str) -> str:
        """Return the container's private IP address on the default network."""
        try:
            code, stdout, stderr = await run_command(
                self.docker_bin, "inspect", "-f", "{{.NetworkSettings.IPAddress}}", container_id,
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise ResolutionError(container_id, "docker inspect timed out")
        except OSError as e:
            raise ResolutionError(container_id, str(e)) from e

        if code != 0:
            raise ResolutionError(container_id, stderr.strip() or f"exit status {code}")

        address = stdout.strip()
        if not address:
            # e.g. containers attached only to user-defined or host networks
            raise ResolutionError(container_id, "no IP address")
        return address
