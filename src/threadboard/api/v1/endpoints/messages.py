# src/threadboard/api/v1/endpoints/messages.py
"""Threaded message endpoints for the Threadboard API."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Query, status

from threadboard.api.v1.dependencies import (
    BearerTokenDep,
    CredentialsDep,
    MessageServiceDep,
    ThreadServiceDep,
    to_http_error,
)
from threadboard.core.errors import ThreadboardError
from threadboard.models.message import Message
from threadboard.schemas.message import (
    DeletedMessage,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
    ThreadNodeResponse,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def create_message(
    payload: MessageCreate,
    token: BearerTokenDep,
    credentials: CredentialsDep,
    messages: MessageServiceDep,
) -> Message:
    """Post a new message, or a reply when ``parentId`` is given."""
    try:
        return messages.create_as(
            credentials, token, payload.user_id, payload.message, payload.parent_id
        )
    except ThreadboardError as err:
        raise to_http_error(err) from err


@router.get("/", response_model=list[MessageResponse])
def find_by_author_and_time_range(
    messages: MessageServiceDep,
    author_id: int = Query(..., alias="authorId", description="Author user id"),
    start: datetime | None = Query(None, description="Inclusive lower bound on message time"),
    end: datetime | None = Query(None, description="Inclusive upper bound on message time"),
) -> list[Message]:
    """List an author's messages, optionally within a message-time window."""
    try:
        return messages.find_by_author_and_time_range(author_id, start, end)
    except ThreadboardError as err:
        raise to_http_error(err) from err


@router.patch("/{message_id}", response_model=MessageResponse)
def modify_message(
    message_id: int,
    payload: MessageUpdate,
    token: BearerTokenDep,
    credentials: CredentialsDep,
    messages: MessageServiceDep,
) -> Message:
    """Replace the body of a message owned by the caller."""
    try:
        return messages.modify_as(credentials, token, message_id, payload.message)
    except ThreadboardError as err:
        raise to_http_error(err) from err


@router.delete("/{message_id}", response_model=DeletedMessage)
def delete_message(
    message_id: int,
    token: BearerTokenDep,
    credentials: CredentialsDep,
    messages: MessageServiceDep,
) -> DeletedMessage:
    """Delete a message owned by the caller; its replies become thread roots."""
    try:
        deleted_id = messages.delete_as(credentials, token, message_id)
    except ThreadboardError as err:
        raise to_http_error(err) from err
    return DeletedMessage(id=deleted_id)


@router.get("/{message_id}/subtree", response_model=list[MessageResponse])
def get_subtree(message_id: int, threads: ThreadServiceDep) -> list[Message]:
    """Return a message and all of its descendants as a flat list."""
    try:
        return threads.subtree_of(message_id)
    except ThreadboardError as err:
        raise to_http_error(err) from err


@router.get("/{message_id}/thread", response_model=ThreadNodeResponse)
def get_thread(message_id: int, threads: ThreadServiceDep) -> ThreadNodeResponse:
    """Return a message and its descendants as a nested reply tree."""
    try:
        node = threads.thread_of(message_id)
    except ThreadboardError as err:
        raise to_http_error(err) from err
    return ThreadNodeResponse.model_validate(node, from_attributes=True)
