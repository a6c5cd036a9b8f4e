# src/threadboard/services/__init__.py
"""Business logic services for the Threadboard application."""

from .credentials import CredentialManager
from .integrity import ThreadIntegrityValidator
from .messages import MessageService
from .threads import ThreadNode, ThreadService

__all__ = [
    "CredentialManager",
    "MessageService",
    "ThreadIntegrityValidator",
    "ThreadNode",
    "ThreadService",
]
