"""Storage contracts shared by the core and its repository implementations."""

from .protocols import (
    ContentStorage,
    GetSubscriptionsOptions,
    GetSubscriptionsResult,
    RecordNotFoundError,
    SourceStorage,
    SubscriptionStorage,
    UserStorage,
)

__all__ = [
    "ContentStorage",
    "GetSubscriptionsOptions",
    "GetSubscriptionsResult",
    "RecordNotFoundError",
    "SourceStorage",
    "SubscriptionStorage",
    "UserStorage",
]
