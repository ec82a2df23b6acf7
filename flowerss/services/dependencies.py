"""FastAPI dependency wiring for the subscription core.

Keeping the factories here leaves :mod:`flowerss.core` free of web-layer
concerns so bot handlers and schedulers can build a :class:`Core` the same way.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flowerss.core import Core
from flowerss.db.connection import get_db
from flowerss.db.repositories import (
    ContentRepository,
    SourceRepository,
    SubscriptionRepository,
    UserRepository,
)
from flowerss.settings import AppSettings, get_settings


def build_core(session: AsyncSession, *, update_interval: int) -> Core:
    """Create a :class:`Core` whose repositories share ``session``."""

    return Core(
        UserRepository(session),
        ContentRepository(session),
        SourceRepository(session),
        SubscriptionRepository(session),
        update_interval=update_interval,
    )


def get_app_settings() -> AppSettings:
    return get_settings()


def get_core(
    session: AsyncSession = Depends(get_db),
    app_settings: AppSettings = Depends(get_app_settings),
) -> Core:
    """Provide a request-scoped :class:`Core`.

    ``get_db`` commits once the handler returns and rolls back if it raises,
    so the steps of a single core operation share one transaction.
    """

    return build_core(session, update_interval=app_settings.update_interval)


__all__ = ["build_core", "get_app_settings", "get_core"]
