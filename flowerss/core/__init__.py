"""Subscription core exposed to bot handlers, schedulers and the HTTP API."""

from .core import Core, format_tags
from .errors import (
    SubscriptionError,
    SubscriptionErrorKind,
    SubscriptionExistError,
    SubscriptionNotExistError,
)

__all__ = [
    "Core",
    "SubscriptionError",
    "SubscriptionErrorKind",
    "SubscriptionExistError",
    "SubscriptionNotExistError",
    "format_tags",
]
