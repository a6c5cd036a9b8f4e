# tests/test_security.py
"""Tests for password and token primitives."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from argon2 import PasswordHasher

from threadboard.core import security
from threadboard.core.errors import InvalidTokenError, SigningError, TokenExpiredError
from threadboard.core.settings import Settings
from threadboard.db.time import as_utc


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


def test_hash_password_never_returns_plaintext(hasher) -> None:
    hashed = security.hash_password(hasher, "hunter2")

    assert hashed != "hunter2"
    assert security.verify_password(hasher, hashed, "hunter2") is True
    assert security.verify_password(hasher, hashed, "hunter3") is False


def test_verify_password_against_garbage_hash_is_false(hasher) -> None:
    assert security.verify_password(hasher, "plaintext-in-db", "plaintext-in-db") is False


def test_build_password_hasher_uses_settings(test_settings) -> None:
    hasher = security.build_password_hasher(test_settings)

    assert hasher.time_cost == 1
    assert hasher.memory_cost == 8
    assert hasher.parallelism == 1


def test_decode_token_round_trip() -> None:
    issued = datetime(2024, 3, 1, tzinfo=UTC)
    token = security.encode_token("7", issued, security.token_expiry(issued))

    claims = security.decode_token(token, issued + timedelta(minutes=5))

    assert claims["sub"] == "7"
    assert claims["iat"] == int(issued.timestamp())


def test_decode_token_expired() -> None:
    issued = datetime(2024, 3, 1, tzinfo=UTC)
    token = security.encode_token("7", issued, issued + timedelta(seconds=10))

    with pytest.raises(TokenExpiredError):
        security.decode_token(token, issued + timedelta(seconds=10))


def test_decode_token_garbage() -> None:
    with pytest.raises(InvalidTokenError):
        security.decode_token("garbage", datetime.now(UTC))


def test_encode_token_with_unsupported_algorithm_is_signing_error() -> None:
    config = Settings(SECRET_KEY="x", JWT_ALGORITHM="HS999")
    issued = datetime(2024, 3, 1, tzinfo=UTC)

    with pytest.raises(SigningError):
        security.encode_token("7", issued, security.token_expiry(issued, config), config)


def test_as_utc_normalizes_offsets() -> None:
    local = datetime(2024, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    naive = datetime(2024, 3, 1, 12, 0)

    assert as_utc(local) == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert as_utc(naive).tzinfo is UTC
