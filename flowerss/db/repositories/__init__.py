"""Repository package for database access layer.

Each repository implements one of the storage protocols from
:mod:`flowerss.storage` on top of a shared ``AsyncSession``.
"""

from flowerss.db.repositories.content_repository import ContentRepository
from flowerss.db.repositories.source_repository import SourceRepository
from flowerss.db.repositories.subscription_repository import SubscriptionRepository
from flowerss.db.repositories.user_repository import UserRepository

__all__ = [
    "ContentRepository",
    "SourceRepository",
    "SubscriptionRepository",
    "UserRepository",
]
