# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta

import pytest
from argon2 import PasswordHasher
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-threadboard")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from threadboard.api.v1.dependencies import get_credential_manager  # noqa: E402
from threadboard.core.settings import Settings  # noqa: E402
from threadboard.db.session import Base, build_engine  # noqa: E402
from threadboard.db.session import get_db as app_get_session  # noqa: E402
from threadboard.main import app as fastapi_app  # noqa: E402
from threadboard.models import User  # noqa: E402
from threadboard.services import CredentialManager, MessageService, ThreadService  # noqa: E402

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


class StepClock:
    """Deterministic clock: each call returns the next instant."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def fast_hasher() -> PasswordHasher:
    """Argon2id hasher with minimal cost to keep tests quick."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    db_session: Session,
    fast_hasher: PasswordHasher,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    def _get_credentials_override() -> CredentialManager:
        return CredentialManager(db_session, hasher=fast_hasher)

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_credential_manager] = _get_credentials_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_credential_manager, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def clock() -> StepClock:
    """Return a clock advancing one minute per reading."""
    return StepClock()


@pytest.fixture()
def credentials(db_session: Session, fast_hasher: PasswordHasher) -> CredentialManager:
    return CredentialManager(db_session, hasher=fast_hasher)


@pytest.fixture()
def message_service(db_session: Session, clock: StepClock) -> MessageService:
    return MessageService(db_session, clock=clock)


@pytest.fixture()
def thread_service(db_session: Session) -> ThreadService:
    return ThreadService(db_session)


@pytest.fixture()
def make_user(credentials: CredentialManager, db_session: Session) -> Callable[..., User]:
    """Register a user through the credential manager and return the row."""

    def _make_user(
        name: str = "Test User",
        email: str | None = None,
        password: str = "correct horse battery staple",
    ) -> User:
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        public = credentials.register(name, email, password)
        user = db_session.get(User, public.id)
        assert user is not None
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("Other User")


@pytest.fixture()
def auth_token(credentials: CredentialManager, test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = credentials.issue_token(test_user.id)
    return {"Authorization": f"Bearer {token.token}"}


@pytest.fixture()
def other_auth_token(credentials: CredentialManager, other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = credentials.issue_token(other_user.id)
    return {"Authorization": f"Bearer {token.token}"}


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with cheap Argon2 parameters, independent of the environment."""
    return Settings(
        SECRET_KEY="another-test-secret",
        ARGON2_TIME_COST=1,
        ARGON2_MEMORY_COST=8,
        ARGON2_PARALLELISM=1,
    )
