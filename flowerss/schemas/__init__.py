from .error import ErrorResponse, ErrorType, ValidationErrorDetail, ValidationErrorResponse
from .subscription import (
    SourceRead,
    SubscriptionCreate,
    SubscriptionRead,
    SubscriptionTagUpdate,
    UnsubscribeAllResponse,
)

__all__ = [
    "ErrorResponse",
    "ErrorType",
    "SourceRead",
    "SubscriptionCreate",
    "SubscriptionRead",
    "SubscriptionTagUpdate",
    "UnsubscribeAllResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
