"""Result store - persistence for probe results."""
import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..errors import StoreError
from ..models import PingResult

logger = logging.getLogger(__name__)


class ResultStore:
    """Owns the ping_results table. Rows are appended, never updated."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def insert(self, ip_address: str, ping_time: float, last_seen: datetime) -> PingResult:
        """Append one probe result."""
        row = PingResult(ip_address=ip_address, ping_time=ping_time, last_seen=last_seen)
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Failed to insert result for {ip_address}: {e}") from e
        return row

    async def list_all(self) -> List[PingResult]:
        """Return every stored result in insertion order."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(PingResult).order_by(PingResult.id))
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            # asyncpg connect errors (e.g. refused) are not wrapped by SQLAlchemy
            raise StoreError(f"Failed to read results: {e}") from e
