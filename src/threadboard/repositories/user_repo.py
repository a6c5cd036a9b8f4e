"""Data access helpers for working with users."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from threadboard.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Return a user by unique email."""
        result = self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    def exists(self, user_id: int) -> bool:
        """Return True if a user row with ``user_id`` exists."""
        result = self.session.execute(select(User.id).where(User.id == user_id))
        return result.first() is not None

    def create(self, *, name: str, email: str, password_hash: str, now: datetime) -> User:
        """Insert a new user and flush so the store assigns its id."""
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        self.session.flush()
        return user

    def update_password_hash(self, user: User, password_hash: str, now: datetime) -> User:
        """Replace a user's stored credential."""
        user.password_hash = password_hash
        user.updated_at = now
        self.session.flush()
        return user
