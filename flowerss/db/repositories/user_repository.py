"""Repository encapsulating user persistence."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flowerss.db.models import User
from flowerss.storage import RecordNotFoundError


class UserRepository:
    """SQLAlchemy implementation of :class:`flowerss.storage.UserStorage`."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_user(self, user: User) -> None:
        self._session.add(user)
        await self._session.flush()

    async def get_user(self, user_id: int) -> User:
        stmt = select(User).where(User.id == user_id)
        user = (await self._session.execute(stmt)).scalar_one_or_none()
        if user is None:
            raise RecordNotFoundError(f"User {user_id} not found")
        return user
