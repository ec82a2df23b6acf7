from __future__ import annotations

import logging
from typing import AsyncIterator
from urllib.parse import urlsplit

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from flowerss.db.models import Base
from flowerss.settings import (
    POSTGRES_ASYNC_PREFIX,
    SQLITE_ASYNC_PREFIX,
    get_settings,
)

logger = logging.getLogger(__name__)


def _validate_database_url(database_url: str) -> str:
    """Perform lightweight structural checks on a resolved database URL.

    Postgres URLs must name both a host and a database; SQLite URLs only need
    the async driver prefix (``sqlite+aiosqlite:///:memory:`` is valid).
    """

    if database_url.startswith(SQLITE_ASYNC_PREFIX):
        return database_url

    if not database_url.startswith(POSTGRES_ASYNC_PREFIX):
        raise RuntimeError(
            "DATABASE_URL must use the PostgreSQL or sqlite+aiosqlite scheme."
        )

    parts = urlsplit(database_url)
    if not parts.hostname or not parts.path.strip("/"):
        raise RuntimeError(
            "DATABASE_URL appears malformed. Verify the host and database name are present."
        )

    return database_url


def get_database_url() -> str:
    """Return the validated async database URL from application settings."""

    return _validate_database_url(get_settings().resolved_database_url)


def get_database_type() -> str:
    """Return ``sqlite`` or ``postgresql`` for the configured database."""

    return get_settings().database_type


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine.

    PostgreSQL engines keep a warm connection pool; SQLite engines use the
    driver defaults because aiosqlite does not benefit from pooling.
    """

    url = _validate_database_url(url or get_database_url())

    if url.startswith(SQLITE_ASYNC_PREFIX):
        return create_async_engine(url, future=True, echo=False)

    return create_async_engine(
        url,
        future=True,
        echo=False,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_timeout=30,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables for the ORM models."""

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Dispose the shared engine and forget the cached session factory."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency to provide database session.

    Every request runs in a single transaction: it commits when the handler
    returns and rolls back when it raises, so multi-step core operations either
    land together or not at all.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
