"""Storage contracts consumed by :class:`flowerss.core.Core`.

Each entity gets its own narrow protocol so the core can be exercised with
lightweight fakes and so alternative backends only have to implement the
handful of methods the core actually calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from flowerss.db.models import Source, Subscription, User


class RecordNotFoundError(LookupError):
    """Raised by storage implementations when a requested row does not exist."""


@dataclass(frozen=True, slots=True)
class GetSubscriptionsOptions:
    """Pagination hints for subscription lookups.

    ``count`` of ``-1`` requests every matching row.
    """

    count: int = -1
    offset: int = 0


@dataclass(frozen=True, slots=True)
class GetSubscriptionsResult:
    """Ordered page of subscriptions plus a continuation flag."""

    subscriptions: list[Subscription] = field(default_factory=list)
    has_more: bool = False


@runtime_checkable
class UserStorage(Protocol):
    async def create_user(self, user: User) -> None:
        """Persist a new user."""

    async def get_user(self, user_id: int) -> User:
        """Return the user or raise :class:`RecordNotFoundError`."""


@runtime_checkable
class SourceStorage(Protocol):
    async def get_source(self, source_id: int) -> Source:
        """Return the source or raise :class:`RecordNotFoundError`."""

    async def delete(self, source_id: int) -> None:
        """Remove the source record."""


@runtime_checkable
class ContentStorage(Protocol):
    async def delete_source_contents(self, source_id: int) -> int:
        """Remove every cached content row of a source, returning the count."""


@runtime_checkable
class SubscriptionStorage(Protocol):
    async def subscription_exist(self, user_id: int, source_id: int) -> bool:
        """Return whether ``user_id`` subscribes to ``source_id``."""

    async def add_subscription(self, subscription: Subscription) -> None:
        """Persist a new subscription."""

    async def get_subscriptions_by_user_id(
        self, user_id: int, options: GetSubscriptionsOptions
    ) -> GetSubscriptionsResult:
        """Return the user's subscriptions honouring ``options``."""

    async def get_subscription(self, user_id: int, source_id: int) -> Subscription:
        """Return one subscription or raise :class:`RecordNotFoundError`."""

    async def update_subscription(self, subscription: Subscription) -> None:
        """Persist attribute changes of an existing subscription."""

    async def delete_subscription(self, user_id: int, source_id: int) -> int:
        """Delete the (user, source) subscription, returning affected rows."""

    async def count_source_subscriptions(self, source_id: int) -> int:
        """Return how many subscriptions reference ``source_id``."""
