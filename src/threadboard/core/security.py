"""Password hashing and bearer token primitives.

Passwords are hashed with Argon2id through ``argon2-cffi``; the encoded hash
string carries its own random salt and cost parameters. Tokens are HS256 JWTs
signed with ``settings.secret_key`` through ``python-jose``.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jose import JWTError, jwt
from jose.exceptions import JOSEError

from threadboard.core.errors import HashingError, InvalidTokenError, SigningError, TokenExpiredError
from threadboard.core.settings import Settings, settings


def build_password_hasher(config: Settings = settings) -> PasswordHasher:
    """Return an Argon2id hasher configured from settings."""
    return PasswordHasher(
        time_cost=config.argon2_time_cost,
        memory_cost=config.argon2_memory_cost,
        parallelism=config.argon2_parallelism,
    )


def hash_password(hasher: PasswordHasher, password: str) -> str:
    """Hash ``password`` with a freshly generated salt.

    Raises:
        HashingError: If the underlying primitive fails.
    """
    try:
        return hasher.hash(password)
    except Argon2HashingError as err:
        raise HashingError() from err


def verify_password(hasher: PasswordHasher, password_hash: str, password: str) -> bool:
    """Return True when ``password`` matches ``password_hash``.

    A stored value that is not a valid Argon2 hash is reported as a mismatch.
    """
    try:
        return hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def encode_token(
    subject: str,
    issued_at: datetime,
    expires_at: datetime,
    config: Settings = settings,
) -> str:
    """Sign a JWT carrying ``sub``, ``iat`` and ``exp`` claims.

    Raises:
        SigningError: The configured algorithm or key cannot sign.
    """
    claims: dict[str, Any] = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    try:
        encoded: str = jwt.encode(claims, config.secret_key, algorithm=config.jwt_algorithm)
    except JOSEError as err:
        raise SigningError() from err
    return encoded


def decode_token(token: str, at: datetime, config: Settings = settings) -> dict[str, Any]:
    """Validate a JWT signature and expiry at instant ``at``.

    Expiry is checked against ``at`` rather than the wall clock so that callers
    can evaluate a token at any instant.

    Raises:
        InvalidTokenError: Malformed, unsigned or wrongly signed token, or a
            token without an ``exp`` claim.
        TokenExpiredError: ``at`` is at or past the ``exp`` claim.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            config.secret_key,
            algorithms=[config.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError as err:
        raise InvalidTokenError() from err

    expires = claims.get("exp")
    if not isinstance(expires, int | float):
        raise InvalidTokenError()
    if at.timestamp() >= expires:
        raise TokenExpiredError()
    return claims


def token_expiry(issued_at: datetime, config: Settings = settings) -> datetime:
    """Return the expiry instant for a token issued at ``issued_at``."""
    return issued_at + timedelta(minutes=config.access_token_expire_minutes)
