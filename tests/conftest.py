"""Shared fixtures: an in-memory SQLite session and fake-backed cores."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from flowerss.core import Core
from flowerss.db.models import Base
from tests.support.fake_storage import FakeStorage, build_fake_storage


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session with freshly created tables."""
    pytest.importorskip("aiosqlite")
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest.fixture
def storage() -> FakeStorage:
    return build_fake_storage()


@pytest.fixture
def core(storage: FakeStorage) -> Core:
    return Core(
        storage.user,
        storage.content,
        storage.source,
        storage.subscription,
        update_interval=15,
    )
