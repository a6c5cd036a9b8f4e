# src/threadboard/models/__init__.py
"""SQLAlchemy models for the Threadboard service."""

from .message import Message
from .user import User

__all__ = ["Message", "User"]
