# src/threadboard/models/message.py
"""SQLAlchemy model for threaded messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.session import Base, BigIntegerId
from threadboard.db.time import utcnow


class Message(Base):
    """A message authored by a user, optionally replying to another message.

    ``parent_id`` is NULL for thread roots. Because a parent must already
    exist when a reply is inserted, the parent relation is a forest.
    """

    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_parent_id", "parent_id"),
        Index("ix_message_user_id_message_time", "user_id", "message_time"),
    )

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id"),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)

    # Replies to a deleted message are re-rooted rather than removed.
    parent_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("message.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Instant the message was accepted; immutable after creation.
    message_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
