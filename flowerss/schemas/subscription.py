"""Pydantic schemas that power the subscription API surface."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SourceRead(BaseModel):
    """A followed feed as returned to API consumers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    link: str
    title: str
    error_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SubscriptionCreate(BaseModel):
    """Payload for subscribing a user to an existing source."""

    source_id: int = Field(..., ge=0, description="Primary key from the sources table")


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    source_id: int
    enable_notification: bool
    enable_telegraph: bool
    tag: str = Field("", description="Space separated #tag tokens")
    interval: int
    wait_time: int


class SubscriptionTagUpdate(BaseModel):
    tags: list[str] = Field(
        default_factory=list,
        description="Replacement tags; an empty list clears existing tags.",
    )


class UnsubscribeAllResponse(BaseModel):
    removed: int = Field(..., ge=0, description="Number of subscriptions removed")
