# src/threadboard/services/credentials.py
"""Registration, login and bearer-token authorization."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from argon2 import PasswordHasher
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadboard.core import security
from threadboard.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotAuthorizedError,
    NotFoundError,
)
from threadboard.core.settings import Settings, settings as default_settings
from threadboard.db.time import utcnow
from threadboard.models.message import Message
from threadboard.models.user import User
from threadboard.repositories.user_repo import UserRepository
from threadboard.schemas.user import PublicUser, Token
from threadboard.services.integrity import USER_NOT_FOUND
from threadboard.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CredentialManager:
    """Service owning password credentials and bearer tokens.

    Password hashes never leave this class: callers receive ``PublicUser``
    views and ``Token`` values only.
    """

    def __init__(
        self,
        session: Session,
        *,
        config: Settings | None = None,
        clock: Clock = utcnow,
        hasher: PasswordHasher | None = None,
    ) -> None:
        self.session = session
        self.config = config or default_settings
        self.clock = clock
        self.hasher = hasher or security.build_password_hasher(self.config)
        self.users = UserRepository(session)

    def register(self, name: str, email: str, password: str) -> PublicUser:
        """Create a user with a salted Argon2id credential.

        Raises:
            DuplicateEmailError: If ``email`` is already registered.
            HashingError: If the hashing primitive fails.
        """
        password_hash = security.hash_password(self.hasher, password)
        try:
            with unit_of_work(self.session):
                if self.users.get_by_email(email) is not None:
                    raise DuplicateEmailError()
                user = self.users.create(
                    name=name,
                    email=email,
                    password_hash=password_hash,
                    now=self.clock(),
                )
        except IntegrityError as err:
            # Lost a race with a concurrent registration of the same email.
            raise DuplicateEmailError() from err

        logger.info("Registered user %s", user.id)
        return PublicUser(id=user.id, name=user.name, email=user.email)

    def login(self, email: str, password: str) -> Token:
        """Verify a password and issue a 24-hour bearer token.

        Raises:
            NotFoundError: If no user has ``email``.
            InvalidCredentialsError: If the password does not match.
        """
        user = self.users.get_by_email(email)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        if not security.verify_password(self.hasher, user.password_hash, password):
            logger.warning("Rejected login for user %s", user.id)
            raise InvalidCredentialsError()

        if self.hasher.check_needs_rehash(user.password_hash):
            with unit_of_work(self.session):
                self.users.update_password_hash(
                    user,
                    security.hash_password(self.hasher, password),
                    self.clock(),
                )
            logger.info("Upgraded password hash parameters for user %s", user.id)

        return self.issue_token(user.id)

    def issue_token(self, user_id: int, *, issued_at: datetime | None = None) -> Token:
        """Sign a token whose subject is ``user_id``."""
        issued = issued_at or self.clock()
        expires = security.token_expiry(issued, self.config)
        encoded = security.encode_token(str(user_id), issued, expires, self.config)
        return Token(token=encoded, token_type="bearer", expires_at=expires)

    def verify_token(self, token: str, *, at: datetime | None = None) -> int:
        """Return the user id asserted by ``token``.

        Args:
            token: Encoded JWT.
            at: Instant to evaluate expiry against; defaults to the clock.

        Raises:
            InvalidTokenError: Bad signature, malformed token or subject.
            TokenExpiredError: The token is expired at ``at``.
        """
        claims = security.decode_token(token, at or self.clock(), self.config)
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject.isdecimal():
            raise InvalidTokenError()
        return int(subject)

    def authenticate(self, token: str) -> User:
        """Resolve ``token`` to a user that still exists."""
        user_id = self.verify_token(token)
        user = self.users.get_by_id(user_id)
        if user is None:
            raise InvalidTokenError()
        return user

    def authorize_author(self, token: str, author_id: int) -> int:
        """Require ``token`` to belong to ``author_id``; return the user id.

        Raises:
            NotAuthorizedError: The token is valid but belongs to someone else.
        """
        user_id = self.verify_token(token)
        if user_id != author_id:
            logger.warning("User %s denied action on behalf of user %s", user_id, author_id)
            raise NotAuthorizedError()
        return user_id

    def authorize_message(self, user_id: int, message: Message) -> int:
        """Require an already authenticated ``user_id`` to be the author of ``message``."""
        if user_id != message.user_id:
            logger.warning("User %s denied action on message %s", user_id, message.id)
            raise NotAuthorizedError()
        return user_id
