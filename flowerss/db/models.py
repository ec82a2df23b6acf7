"""SQLAlchemy ORM models for users, feed sources, cached content and subscriptions.

Sources and their content are linked by ``source_id`` only; there is no
database-level cascade. Removing an orphaned source and its content is the
responsibility of :class:`flowerss.core.Core`.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    # Chat platform identifiers are 64-bit and supplied by the caller.
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    state: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Source(Base):
    """A followed feed."""

    __tablename__ = "sources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    link: Mapped[str] = mapped_column(String(2048), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    error_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class Content(Base):
    """Cached item previously fetched from a source."""

    __tablename__ = "contents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    hash_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    raw_id: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    raw_link: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    telegraph_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Subscription(Base):
    """Association row recording that a user follows a source."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "source_id",
            name="uq_subscriptions_user_source",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    source_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    enable_notification: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    enable_telegraph: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    tag: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        default="",
        doc="Space separated ``#tag`` tokens, empty when untagged.",
    )
    interval: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    wait_time: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


__all__ = ["Base", "Content", "Source", "Subscription", "User", "utcnow"]
