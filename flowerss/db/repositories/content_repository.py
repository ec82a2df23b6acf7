"""Repository encapsulating cached feed content."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from flowerss.db.models import Content

class ContentRepository:
    """SQLAlchemy implementation of :class:`flowerss.storage.ContentStorage`."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_contents(self, contents: Iterable[Content]) -> None:
        self._session.add_all(list(contents))
        await self._session.flush()

    async def delete_source_contents(self, source_id: int) -> int:
        result = await self._session.execute(
            delete(Content).where(Content.source_id == source_id)
        )
        return int(result.rowcount or 0)
