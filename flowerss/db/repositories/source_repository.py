"""Repository encapsulating feed source persistence."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from flowerss.db.models import Source
from flowerss.storage import RecordNotFoundError

class SourceRepository:
    """SQLAlchemy implementation of :class:`flowerss.storage.SourceStorage`."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_source(self, source: Source) -> Source:
        """Persist a new source and return it with its generated identifier."""

        self._session.add(source)
        await self._session.flush()
        return source

    async def get_source(self, source_id: int) -> Source:
        stmt = select(Source).where(Source.id == source_id)
        source = (await self._session.execute(stmt)).scalar_one_or_none()
        if source is None:
            raise RecordNotFoundError(f"Source {source_id} not found")
        return source

    async def delete(self, source_id: int) -> None:
        await self._session.execute(delete(Source).where(Source.id == source_id))
