# src/threadboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Threadboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from threadboard.api.v1.dependencies import CredentialsDep, to_http_error
from threadboard.core.errors import ThreadboardError
from threadboard.schemas.user import LoginRequest, PublicUser, RegisterRequest, Token

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
    response_model=PublicUser,
)
def register_user(payload: RegisterRequest, credentials: CredentialsDep) -> PublicUser:
    """Register a user and return its public view."""
    try:
        return credentials.register(payload.name, payload.email, payload.password)
    except ThreadboardError as err:
        raise to_http_error(err) from err


@router.post(
    "/login",
    summary="Exchange email and password for a bearer token",
    response_model=Token,
    response_model_by_alias=True,
)
def login_user(payload: LoginRequest, credentials: CredentialsDep) -> Token:
    """Authenticate with email and password."""
    try:
        return credentials.login(payload.email, payload.password)
    except ThreadboardError as err:
        raise to_http_error(err) from err
