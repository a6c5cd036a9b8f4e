# src/threadboard/schemas/message.py
"""Message-related Pydantic schemas.

Boundary payloads use camelCase names (``userId``, ``parentId``,
``messageTime``, ``createdAt``, ``updatedAt``); snake_case is accepted on input.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_BOUNDARY_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class MessageCreate(BaseModel):
    """Schema for posting a new message or reply."""

    user_id: int = Field(..., description="Author user id")
    message: str = Field(..., min_length=1, description="Message body")
    parent_id: int | None = Field(None, description="Parent message id for replies")

    model_config = _BOUNDARY_CONFIG


class MessageUpdate(BaseModel):
    """Schema for replacing a message body."""

    message: str = Field(..., min_length=1, description="New message body")

    model_config = _BOUNDARY_CONFIG


class MessageResponse(BaseModel):
    """Persisted message as returned by the API."""

    id: int
    user_id: int
    message: str
    parent_id: int | None
    message_time: datetime
    created_at: datetime
    updated_at: datetime

    model_config = _BOUNDARY_CONFIG


class DeletedMessage(BaseModel):
    """Confirmation of a deletion."""

    id: int


class ThreadNodeResponse(BaseModel):
    """A message together with its nested replies."""

    message: MessageResponse
    replies: list[ThreadNodeResponse] = Field(default_factory=list)

    model_config = _BOUNDARY_CONFIG
