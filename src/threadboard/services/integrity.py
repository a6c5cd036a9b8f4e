"""Referential checks performed before writes.

These checks run in the caller's session, and therefore in the same
transaction as the write that follows. They exist to report which entity is
missing; the store's foreign keys remain the authoritative guarantee.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from threadboard.core.errors import NotFoundError
from threadboard.models.message import Message
from threadboard.repositories.message_repo import MessageRepository
from threadboard.repositories.user_repo import UserRepository

USER_NOT_FOUND = "User not found."
MESSAGE_NOT_FOUND = "Message not found."
PARENT_NOT_FOUND = "Parent message not found."


class ThreadIntegrityValidator:
    """Existence probes for users, messages and parent references."""

    def __init__(self, session: Session) -> None:
        self.users = UserRepository(session)
        self.messages = MessageRepository(session)

    def assert_user_exists(self, user_id: int) -> None:
        """Raise ``NotFoundError`` if no user has ``user_id``."""
        if not self.users.exists(user_id):
            raise NotFoundError(USER_NOT_FOUND)

    def assert_message_exists(self, message_id: int) -> Message:
        """Return the message with ``message_id`` or raise ``NotFoundError``."""
        message = self.messages.get_by_id(message_id)
        if message is None:
            raise NotFoundError(MESSAGE_NOT_FOUND)
        return message

    def assert_parent_valid(self, parent_id: int | None) -> None:
        """Accept a missing parent; otherwise require the parent to exist."""
        if parent_id is None:
            return
        if not self.messages.exists(parent_id):
            raise NotFoundError(PARENT_NOT_FOUND)
