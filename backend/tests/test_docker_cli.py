import asyncio

import pytest

from pingwatch.errors import EnumerationError, ResolutionError
from pingwatch.services.docker_cli import DockerCLI

from .conftest import FakeProcess

PS = ("docker", "ps", "--format", "{{.ID}}")


def inspect_args(container_id: str):
    return ("docker", "inspect", "-f", "{{.NetworkSettings.IPAddress}}", container_id)


def test_list_running_returns_ids_in_order(fake_exec) -> None:
    fake_exec.responses[PS] = FakeProcess(stdout="c1\nc2\n\n")
    assert asyncio.run(DockerCLI().list_running()) == ["c1", "c2"]


def test_list_running_empty_is_not_an_error(fake_exec) -> None:
    fake_exec.responses[PS] = FakeProcess(stdout="")
    assert asyncio.run(DockerCLI().list_running()) == []


def test_list_running_nonzero_exit_raises(fake_exec) -> None:
    fake_exec.responses[PS] = FakeProcess(returncode=1, stderr="Cannot connect to the Docker daemon")
    with pytest.raises(EnumerationError, match="Cannot connect"):
        asyncio.run(DockerCLI().list_running())


def test_list_running_missing_binary_raises(fake_exec) -> None:
    with pytest.raises(EnumerationError):
        asyncio.run(DockerCLI().list_running())


def test_list_running_timeout_kills_process(fake_exec) -> None:
    proc = FakeProcess(hang=True)
    fake_exec.responses[PS] = proc
    with pytest.raises(EnumerationError, match="timed out"):
        asyncio.run(DockerCLI(timeout=0.05).list_running())
    assert proc.killed


def test_inspect_address(fake_exec) -> None:
    fake_exec.responses[inspect_args("c1")] = FakeProcess(stdout="172.17.0.2\n")
    assert asyncio.run(DockerCLI().inspect_address("c1")) == "172.17.0.2"


def test_inspect_address_failure(fake_exec) -> None:
    fake_exec.responses[inspect_args("gone")] = FakeProcess(returncode=1, stderr="No such object: gone")
    with pytest.raises(ResolutionError) as exc_info:
        asyncio.run(DockerCLI().inspect_address("gone"))
    assert exc_info.value.container_id == "gone"
    assert "No such object" in exc_info.value.reason


def test_inspect_empty_address_is_a_failure(fake_exec) -> None:
    fake_exec.responses[inspect_args("hostnet")] = FakeProcess(stdout="\n")
    with pytest.raises(ResolutionError, match="no IP address"):
        asyncio.run(DockerCLI().inspect_address("hostnet"))


def test_non_utf8_output_is_decoded_with_replacement(fake_exec) -> None:
    fake_exec.responses[inspect_args("c1")] = FakeProcess(returncode=1, stderr=b"Error: \xff\xfe no such object")
    with pytest.raises(ResolutionError) as exc_info:
        asyncio.run(DockerCLI().inspect_address("c1"))
    assert "�" in exc_info.value.reason

    fake_exec.responses[PS] = FakeProcess(stdout=b"c1\n\xffc2\n")
    assert asyncio.run(DockerCLI().list_running()) == ["c1", "�c2"]
