"""Shared fixtures: fake subprocesses and temporary SQLite stores."""
import asyncio
from typing import Dict, List, Optional, Tuple

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from pingwatch.database import build_session_factory, init_db
from pingwatch.services.store import ResultStore


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(self, returncode: int = 0, stdout=b"", stderr=b"", hang: bool = False):
        self.returncode = returncode
        # str or raw bytes, as the real process may emit non-UTF-8 output
        self._stdout = stdout.encode() if isinstance(stdout, str) else stdout
        self._stderr = stderr.encode() if isinstance(stderr, str) else stderr
        self._hang = hang
        self.killed = False

    async def communicate(self):
        if self._hang:
            await asyncio.sleep(3600)
        return self._stdout, self._stderr

    def kill(self):
        self.killed = True


class FakeExec:
    """Replacement for asyncio.create_subprocess_exec keyed on argv."""

    def __init__(self, responses: Dict[Tuple[str, ...], FakeProcess], default: Optional[FakeProcess] = None):
        self.responses = responses
        self.default = default
        self.calls: List[Tuple[str, ...]] = []

    async def __call__(self, *args, **kwargs):
        self.calls.append(args)
        if args in self.responses:
            return self.responses[args]
        if self.default is not None:
            return self.default
        raise FileNotFoundError(args[0])


@pytest.fixture
def fake_exec(monkeypatch):
    """Install a FakeExec; tests fill in `responses`."""
    fake = FakeExec({})
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
    return fake


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'pingwatch.db'}"


async def make_store(db_url: str) -> ResultStore:
    # NullPool: every connection is opened on the loop that uses it
    engine = create_async_engine(db_url, poolclass=NullPool)
    await init_db(engine)
    return ResultStore(build_session_factory(engine))


@pytest.fixture
def store(db_url):
    return asyncio.run(make_store(db_url))
