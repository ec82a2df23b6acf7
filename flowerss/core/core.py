"""Subscription workflows spanning the user, source, content and subscription stores.

Core keeps no state of its own. Each operation awaits its collaborators one
call at a time and stops at the first failure. Nothing is retried or
compensated: once a mutating step has succeeded, a later failure is reported
but the earlier change stays in place. Callers that need all-or-nothing
semantics run the whole operation inside one storage transaction (see
:func:`flowerss.services.dependencies.get_core`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flowerss.core.errors import SubscriptionExistError, SubscriptionNotExistError
from flowerss.db.models import Source, Subscription
from flowerss.settings import DEFAULT_UPDATE_INTERVAL_MINUTES
from flowerss.storage import (
    ContentStorage,
    GetSubscriptionsOptions,
    SourceStorage,
    SubscriptionStorage,
    UserStorage,
)

logger = logging.getLogger(__name__)

# Bulk lookup: every subscription of the user in one page.
ALL_SUBSCRIPTIONS = GetSubscriptionsOptions(count=-1)


def format_tags(tags: Iterable[str]) -> str:
    """Normalise raw tag input into the stored ``"#a #b"`` representation."""

    seen: list[str] = []
    for raw in tags:
        cleaned = raw.strip().lstrip("#").strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return " ".join(f"#{tag}" for tag in seen)


class Core:
    """Facade coordinating the four storage collaborators."""

    def __init__(
        self,
        user: UserStorage,
        content: ContentStorage,
        source: SourceStorage,
        subscription: SubscriptionStorage,
        *,
        update_interval: int = DEFAULT_UPDATE_INTERVAL_MINUTES,
    ) -> None:
        self._user = user
        self._content = content
        self._source = source
        self._subscription = subscription
        self._update_interval = update_interval

    async def add_subscription(self, user_id: int, source_id: int) -> None:
        """Subscribe ``user_id`` to ``source_id``.

        Raises:
            SubscriptionExistError: the pair is already subscribed.
        """

        if await self._subscription.subscription_exist(user_id, source_id):
            raise SubscriptionExistError(user_id, source_id)

        subscription = Subscription(
            user_id=user_id,
            source_id=source_id,
            enable_notification=True,
            enable_telegraph=True,
            tag="",
            interval=self._update_interval,
            wait_time=self._update_interval,
        )
        await self._subscription.add_subscription(subscription)
        logger.info(f"User {user_id} subscribed to source {source_id}")

    async def get_user_subscribed_sources(self, user_id: int) -> list[Source]:
        """Return the sources ``user_id`` follows.

        Only a failed subscription lookup is raised. A source that cannot be
        loaded (for example one deleted by a concurrent unsubscribe) is logged
        and left out, so one bad source never hides the rest.
        """

        result = await self._subscription.get_subscriptions_by_user_id(
            user_id, ALL_SUBSCRIPTIONS
        )

        sources: list[Source] = []
        for subscription in result.subscriptions:
            try:
                source = await self._source.get_source(subscription.source_id)
            except Exception as exc:
                logger.warning(
                    f"Skipping source {subscription.source_id} for user {user_id}: {exc!r}"
                )
                continue
            sources.append(source)
        return sources

    async def unsubscribe(self, user_id: int, source_id: int) -> None:
        """Remove a subscription and purge the source once nobody follows it.

        A failure after the subscription row is gone leaves it gone; the
        source cleanup state is then unknown to the caller.

        Raises:
            SubscriptionNotExistError: the pair is not subscribed.
        """

        if not await self._subscription.subscription_exist(user_id, source_id):
            raise SubscriptionNotExistError(user_id, source_id)

        await self._subscription.delete_subscription(user_id, source_id)
        logger.info(f"User {user_id} unsubscribed from source {source_id}")

        remaining = await self._subscription.count_source_subscriptions(source_id)
        if remaining > 0:
            return

        await self._source.delete(source_id)
        purged = await self._content.delete_source_contents(source_id)
        logger.info(
            f"Purged orphaned source {source_id} and {purged} cached content item(s)"
        )

    async def unsubscribe_all_sources(self, user_id: int) -> int:
        """Unsubscribe ``user_id`` from everything, returning how many were removed.

        Stops at the first failure; subscriptions removed before it stay removed.
        """

        result = await self._subscription.get_subscriptions_by_user_id(
            user_id, ALL_SUBSCRIPTIONS
        )
        removed = 0
        for subscription in result.subscriptions:
            await self.unsubscribe(user_id, subscription.source_id)
            removed += 1
        return removed

    async def get_source(self, source_id: int) -> Source:
        return await self._source.get_source(source_id)

    async def get_subscription(self, user_id: int, source_id: int) -> Subscription:
        return await self._subscription.get_subscription(user_id, source_id)

    async def set_subscription_tag(
        self, user_id: int, source_id: int, tags: Iterable[str]
    ) -> Subscription:
        """Replace the subscription's tags; an empty iterable clears them."""

        subscription = await self._subscription.get_subscription(user_id, source_id)
        subscription.tag = format_tags(tags)
        await self._subscription.update_subscription(subscription)
        return subscription

    async def toggle_subscription_notice(
        self, user_id: int, source_id: int
    ) -> Subscription:
        subscription = await self._subscription.get_subscription(user_id, source_id)
        subscription.enable_notification = not subscription.enable_notification
        await self._subscription.update_subscription(subscription)
        return subscription

    async def toggle_subscription_telegraph(
        self, user_id: int, source_id: int
    ) -> Subscription:
        subscription = await self._subscription.get_subscription(user_id, source_id)
        subscription.enable_telegraph = not subscription.enable_telegraph
        await self._subscription.update_subscription(subscription)
        return subscription
