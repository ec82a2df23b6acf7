"""Repository encapsulating user to source subscriptions."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from flowerss.db.models import Subscription
from flowerss.storage import (
    GetSubscriptionsOptions,
    GetSubscriptionsResult,
    RecordNotFoundError,
)


class SubscriptionRepository:
    """SQLAlchemy implementation of :class:`flowerss.storage.SubscriptionStorage`.

    Uniqueness of (user_id, source_id) is enforced by the
    ``uq_subscriptions_user_source`` constraint, so a concurrent duplicate
    insert surfaces as :class:`sqlalchemy.exc.IntegrityError` on flush.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def subscription_exist(self, user_id: int, source_id: int) -> bool:
        stmt = (
            select(func.count())
            .select_from(Subscription)
            .where(Subscription.user_id == user_id, Subscription.source_id == source_id)
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar_one())

    async def add_subscription(self, subscription: Subscription) -> None:
        self._session.add(subscription)
        await self._session.flush()

    async def get_subscriptions_by_user_id(
        self, user_id: int, options: GetSubscriptionsOptions
    ) -> GetSubscriptionsResult:
        stmt: Select[Any] = (
            select(Subscription)
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.id)
        )
        if options.offset > 0:
            stmt = stmt.offset(options.offset)
        if options.count >= 0:
            # Fetch one extra row to learn whether another page exists.
            stmt = stmt.limit(options.count + 1)

        result = await self._session.execute(stmt)
        rows = list(result.scalars().all())
        has_more = options.count >= 0 and len(rows) > options.count
        if has_more:
            rows = rows[: options.count]
        return GetSubscriptionsResult(subscriptions=rows, has_more=has_more)

    async def get_subscription(self, user_id: int, source_id: int) -> Subscription:
        stmt = select(Subscription).where(
            Subscription.user_id == user_id, Subscription.source_id == source_id
        )
        subscription = (await self._session.execute(stmt)).scalar_one_or_none()
        if subscription is None:
            raise RecordNotFoundError(
                f"Subscription of user {user_id} to source {source_id} not found"
            )
        return subscription

    async def update_subscription(self, subscription: Subscription) -> None:
        await self._session.merge(subscription)
        await self._session.flush()

    async def delete_subscription(self, user_id: int, source_id: int) -> int:
        result = await self._session.execute(
            delete(Subscription).where(
                Subscription.user_id == user_id, Subscription.source_id == source_id
            )
        )
        return int(result.rowcount or 0)

    async def count_source_subscriptions(self, source_id: int) -> int:
        stmt = select(func.count()).select_from(Subscription).where(
            Subscription.source_id == source_id
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one() or 0)
