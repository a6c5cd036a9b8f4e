"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from threadboard.core.errors import ThreadboardError
from threadboard.db.session import get_db
from threadboard.services import CredentialManager, MessageService, ThreadService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_credential_manager(db: SessionDep) -> CredentialManager:
    """Return a credential manager bound to the request session."""
    return CredentialManager(db)


def get_message_service(db: SessionDep) -> MessageService:
    """Return a message service bound to the request session."""
    return MessageService(db)


def get_thread_service(db: SessionDep) -> ThreadService:
    """Return a thread service bound to the request session."""
    return ThreadService(db)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Extract the raw bearer token from the Authorization header."""
    return credentials.credentials


def to_http_error(err: ThreadboardError) -> HTTPException:
    """Translate a domain error into an HTTP error with its message as detail."""
    headers = {"WWW-Authenticate": "Bearer"} if err.status_code == 401 else None
    return HTTPException(status_code=err.status_code, detail=err.message, headers=headers)


CredentialsDep = Annotated[CredentialManager, Depends(get_credential_manager)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
ThreadServiceDep = Annotated[ThreadService, Depends(get_thread_service)]
BearerTokenDep = Annotated[str, Depends(get_bearer_token)]
