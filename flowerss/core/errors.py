"""Business conditions raised by :class:`flowerss.core.Core`.

These are expected outcomes ("already subscribed", "not subscribed"), kept
apart from storage failures, which propagate as whatever exception the storage
layer raised.
"""

from __future__ import annotations

from enum import Enum


class SubscriptionErrorKind(str, Enum):
    """Closed set of business outcomes for subscription changes."""

    EXISTS = "subscription_exists"
    NOT_EXISTS = "subscription_not_exists"


class SubscriptionError(Exception):
    """Base class for subscription business conditions."""

    kind: SubscriptionErrorKind
    default_message = "subscription error"

    def __init__(self, user_id: int, source_id: int, message: str | None = None) -> None:
        self.user_id = user_id
        self.source_id = source_id
        super().__init__(message or self.default_message)


class SubscriptionExistError(SubscriptionError):
    kind = SubscriptionErrorKind.EXISTS
    default_message = "subscription already exists"


class SubscriptionNotExistError(SubscriptionError):
    kind = SubscriptionErrorKind.NOT_EXISTS
    default_message = "subscription does not exist"


__all__ = [
    "SubscriptionError",
    "SubscriptionErrorKind",
    "SubscriptionExistError",
    "SubscriptionNotExistError",
]
