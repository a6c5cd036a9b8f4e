"""Data access helpers for working with messages."""
from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from threadboard.models.message import Message

__all__ = ["MessageRepository"]


class MessageRepository:
    """Thin wrapper around database access for message entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, message_id: int) -> Message | None:
        """Return a message by identifier."""
        return self.session.get(Message, message_id)

    def exists(self, message_id: int) -> bool:
        """Return True if a message row with ``message_id`` exists."""
        result = self.session.execute(select(Message.id).where(Message.id == message_id))
        return result.first() is not None

    def create(
        self,
        *,
        user_id: int,
        body: str,
        parent_id: int | None,
        message_time: datetime,
    ) -> Message:
        """Insert a new message and return the persisted ORM instance.

        Args:
            user_id: Author of the message.
            body: Message text.
            parent_id: Message being replied to, or None for a thread root.
            message_time: Acceptance instant; also used for the audit columns.
        """
        message = Message(
            user_id=user_id,
            message=body,
            parent_id=parent_id,
            message_time=message_time,
            created_at=message_time,
            updated_at=message_time,
        )
        self.session.add(message)
        self.session.flush()
        return message

    def update_body(self, message: Message, body: str, now: datetime) -> Message:
        """Replace a message body and bump its update timestamp."""
        message.message = body
        message.updated_at = now
        self.session.flush()
        return message

    def detach_children(self, parent_id: int) -> int:
        """Re-root direct replies of ``parent_id``; return how many moved."""
        result = self.session.execute(
            update(Message)
            .where(Message.parent_id == parent_id)
            .values(parent_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    def delete(self, message: Message) -> int:
        """Delete a message row and return its id."""
        message_id = message.id
        self.session.delete(message)
        self.session.flush()
        return message_id

    def list_by_author(
        self,
        user_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Message]:
        """Return an author's messages, optionally bounded by message time.

        Both bounds are inclusive and independently optional.
        """
        stmt = select(Message).where(Message.user_id == user_id)
        if start is not None and end is not None:
            stmt = stmt.where(Message.message_time.between(start, end))
        elif start is not None:
            stmt = stmt.where(Message.message_time >= start)
        elif end is not None:
            stmt = stmt.where(Message.message_time <= end)
        result = self.session.execute(stmt.order_by(Message.message_time, Message.id))
        return list(result.scalars())

    def list_children_of(self, parent_ids: Collection[int]) -> list[Message]:
        """Return every message whose parent is one of ``parent_ids``."""
        if not parent_ids:
            return []
        result = self.session.execute(
            select(Message)
            .where(Message.parent_id.in_(parent_ids))
            .order_by(Message.id)
        )
        return list(result.scalars())
