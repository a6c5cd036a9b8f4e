"""Domain errors raised by the Threadboard services.

Every error carries a user-displayable message. The transport layer maps each
class to an HTTP status via ``status_code``.
"""

from __future__ import annotations

from fastapi import status


class ThreadboardError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ThreadboardError):
    """A referenced user, message or parent message does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class InvalidCredentialsError(ThreadboardError):
    """The supplied password does not match the stored credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password."


class DuplicateEmailError(ThreadboardError):
    """A user with the same email is already registered."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered."


class TokenExpiredError(ThreadboardError):
    """The bearer token is past its expiry."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token has expired."


class InvalidTokenError(ThreadboardError):
    """The bearer token is malformed, unsigned, or signed with another key."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials."


class NotAuthorizedError(ThreadboardError):
    """The authenticated user is not allowed to act on the target message."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to modify this message."


class StorageError(ThreadboardError):
    """Unclassified failure of the underlying store."""

    default_message = "Storage failure."


class HashingError(ThreadboardError):
    """The password hashing primitive failed. Treated as fatal."""

    default_message = "Password hashing failed."


class SigningError(ThreadboardError):
    """The token signing primitive failed. Treated as fatal."""

    default_message = "Token signing failed."


__all__ = [
    "ThreadboardError",
    "NotFoundError",
    "InvalidCredentialsError",
    "DuplicateEmailError",
    "TokenExpiredError",
    "InvalidTokenError",
    "NotAuthorizedError",
    "StorageError",
    "HashingError",
    "SigningError",
]
