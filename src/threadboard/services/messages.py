# src/threadboard/services/messages.py
"""Create, modify, delete and query individual messages."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadboard.core.errors import NotFoundError, StorageError
from threadboard.db.time import as_utc, utcnow
from threadboard.models.message import Message
from threadboard.repositories.message_repo import MessageRepository
from threadboard.services.credentials import CredentialManager
from threadboard.services.integrity import PARENT_NOT_FOUND, ThreadIntegrityValidator
from threadboard.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class MessageService:
    """Single-message operations guarded by referential checks.

    Each mutation runs its existence checks and its write in one transaction.
    """

    def __init__(self, session: Session, *, clock: Clock = utcnow) -> None:
        self.session = session
        self.clock = clock
        self.repo = MessageRepository(session)
        self.validator = ThreadIntegrityValidator(session)

    def create(self, author_id: int, body: str, parent_id: int | None = None) -> Message:
        """Persist a new message or reply.

        Raises:
            NotFoundError: "User not found." or "Parent message not found."
        """
        try:
            with unit_of_work(self.session):
                self.validator.assert_user_exists(author_id)
                self.validator.assert_parent_valid(parent_id)
                message = self.repo.create(
                    user_id=author_id,
                    body=body,
                    parent_id=parent_id,
                    message_time=self.clock(),
                )
        except IntegrityError as err:
            # The parent (or author) vanished between the check and the insert.
            if parent_id is not None and not self.repo.exists(parent_id):
                raise NotFoundError(PARENT_NOT_FOUND) from err
            raise StorageError() from err

        logger.info("Created message %s by user %s", message.id, author_id)
        return message

    def modify(self, message_id: int, body: str) -> Message:
        """Replace a message body; message and creation times are unchanged."""
        with unit_of_work(self.session):
            message = self.validator.assert_message_exists(message_id)
            self.repo.update_body(message, body, self.clock())
        logger.info("Modified message %s", message_id)
        return message

    def delete(self, message_id: int) -> int:
        """Delete a message and re-root its direct replies.

        Returns:
            The id of the deleted message.
        """
        with unit_of_work(self.session):
            message = self.validator.assert_message_exists(message_id)
            detached = self.repo.detach_children(message_id)
            deleted_id = self.repo.delete(message)
        logger.info("Deleted message %s, re-rooted %d replies", deleted_id, detached)
        return deleted_id

    def find_by_author_and_time_range(
        self,
        author_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Message]:
        """Return an author's messages whose message time lies in [start, end].

        Either bound may be omitted; omitting both returns every message by
        the author.
        """
        self.validator.assert_user_exists(author_id)
        return self.repo.list_by_author(
            author_id,
            as_utc(start) if start is not None else None,
            as_utc(end) if end is not None else None,
        )

    # Token-gated variants used by the transport layer.

    def create_as(
        self,
        credentials: CredentialManager,
        token: str,
        author_id: int,
        body: str,
        parent_id: int | None = None,
    ) -> Message:
        """Create a message on behalf of the token's subject only."""
        credentials.authorize_author(token, author_id)
        return self.create(author_id, body, parent_id)

    def modify_as(
        self,
        credentials: CredentialManager,
        token: str,
        message_id: int,
        body: str,
    ) -> Message:
        """Modify a message only if ``token`` belongs to its author."""
        user = credentials.authenticate(token)
        message = self.validator.assert_message_exists(message_id)
        credentials.authorize_message(user.id, message)
        return self.modify(message_id, body)

    def delete_as(self, credentials: CredentialManager, token: str, message_id: int) -> int:
        """Delete a message only if ``token`` belongs to its author."""
        user = credentials.authenticate(token)
        message = self.validator.assert_message_exists(message_id)
        credentials.authorize_message(user.id, message)
        return self.delete(message_id)
