"""FastAPI router exposing a user's feed subscriptions.

Business conditions raised by the core (already subscribed, not subscribed,
unknown rows) are translated into structured error payloads by the exception
handlers registered in :mod:`flowerss.main`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from flowerss.core import Core
from flowerss.schemas.subscription import (
    SourceRead,
    SubscriptionCreate,
    SubscriptionRead,
    SubscriptionTagUpdate,
    UnsubscribeAllResponse,
)
from flowerss.services.dependencies import get_core

router = APIRouter()


@router.post(
    "/{user_id}/subscriptions",
    response_model=SubscriptionRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_subscription(
    user_id: int,
    payload: SubscriptionCreate,
    core: Core = Depends(get_core),
) -> SubscriptionRead:
    """Subscribe the user to an existing source."""

    await core.add_subscription(user_id, payload.source_id)
    subscription = await core.get_subscription(user_id, payload.source_id)
    return SubscriptionRead.model_validate(subscription)


@router.get("/{user_id}/sources", response_model=list[SourceRead])
async def list_subscribed_sources(
    user_id: int,
    core: Core = Depends(get_core),
) -> list[SourceRead]:
    """Return every source the user follows that could be loaded."""

    sources = await core.get_user_subscribed_sources(user_id)
    return [SourceRead.model_validate(source) for source in sources]


@router.get(
    "/{user_id}/subscriptions/{source_id}",
    response_model=SubscriptionRead,
)
async def get_subscription(
    user_id: int,
    source_id: int,
    core: Core = Depends(get_core),
) -> SubscriptionRead:
    subscription = await core.get_subscription(user_id, source_id)
    return SubscriptionRead.model_validate(subscription)


@router.delete(
    "/{user_id}/subscriptions/{source_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def unsubscribe(
    user_id: int,
    source_id: int,
    core: Core = Depends(get_core),
) -> Response:
    """Remove the subscription, purging the source if nobody else follows it."""

    await core.unsubscribe(user_id, source_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}/subscriptions", response_model=UnsubscribeAllResponse)
async def unsubscribe_all(
    user_id: int,
    core: Core = Depends(get_core),
) -> UnsubscribeAllResponse:
    removed = await core.unsubscribe_all_sources(user_id)
    return UnsubscribeAllResponse(removed=removed)


@router.put(
    "/{user_id}/subscriptions/{source_id}/tags",
    response_model=SubscriptionRead,
)
async def set_subscription_tags(
    user_id: int,
    source_id: int,
    payload: SubscriptionTagUpdate,
    core: Core = Depends(get_core),
) -> SubscriptionRead:
    subscription = await core.set_subscription_tag(user_id, source_id, payload.tags)
    return SubscriptionRead.model_validate(subscription)


@router.post(
    "/{user_id}/subscriptions/{source_id}/notice/toggle",
    response_model=SubscriptionRead,
)
async def toggle_notice(
    user_id: int,
    source_id: int,
    core: Core = Depends(get_core),
) -> SubscriptionRead:
    subscription = await core.toggle_subscription_notice(user_id, source_id)
    return SubscriptionRead.model_validate(subscription)


@router.post(
    "/{user_id}/subscriptions/{source_id}/telegraph/toggle",
    response_model=SubscriptionRead,
)
async def toggle_telegraph(
    user_id: int,
    source_id: int,
    core: Core = Depends(get_core),
) -> SubscriptionRead:
    subscription = await core.toggle_subscription_telegraph(user_id, source_id)
    return SubscriptionRead.model_validate(subscription)
