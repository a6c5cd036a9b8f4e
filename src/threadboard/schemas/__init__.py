"""Pydantic schemas for API requests and responses."""

from .message import (
    DeletedMessage,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
    ThreadNodeResponse,
)
from .user import LoginRequest, PublicUser, RegisterRequest, Token

__all__ = [
    "DeletedMessage",
    "MessageCreate",
    "MessageResponse",
    "MessageUpdate",
    "ThreadNodeResponse",
    "LoginRequest",
    "PublicUser",
    "RegisterRequest",
    "Token",
]
