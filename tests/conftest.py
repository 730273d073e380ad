# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["VERIFICATION_SWEEP_INTERVAL_SECONDS"] = "0"
os.environ["ADMIN_EMAIL"] = "admin@gridrr.com"

from gridrr.core.security import create_access_token, hash_password  # noqa: E402
from gridrr.db.session import Base  # noqa: E402
from gridrr.db.session import get_db as app_get_session  # noqa: E402
from gridrr.main import app as fastapi_app  # noqa: E402
from gridrr.models import Post, User  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"

_USER_COUNTER = count(1)
_POST_COUNTER = count(1)
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)
# Hash once; pbkdf2 is deliberately slow.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture()
def db_session(engine: Engine, session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so each test clears every table afterwards.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique emails."""

    def _make_user(email: str | None = None, **overrides: object) -> User:
        n = next(_USER_COUNTER)
        user = User(
            first_name=str(overrides.pop("first_name", f"First{n}")),
            last_name=str(overrides.pop("last_name", f"Last{n}")),
            email=email or f"user{n}@example.com",
            password_hash=_PASSWORD_HASH,
            accepted_terms=True,
            **overrides,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def user(make_user: Callable[..., User]) -> User:
    return make_user(first_name="Ada", last_name="Lovelace")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user(first_name="Grace", last_name="Hopper")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user(email="admin@gridrr.com", first_name="Admin", last_name="User")


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(user: User) -> dict[str, str]:
    return auth_headers_for(user)


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory for posts; each new post is one minute newer than the last."""

    def _make_post(
        author: User,
        title: str = "Untitled",
        tags: list[str] | None = None,
        image_urls: list[str] | None = None,
    ) -> Post:
        n = next(_POST_COUNTER)
        post = Post(
            user_id=author.id,
            title=title,
            tags=tags or [],
            image_urls=image_urls or [f"https://cdn.example.com/{n}.jpg"],
            created_at=_BASE_TIME + timedelta(minutes=n),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers_for


@pytest.fixture()
def user_password() -> str:
    """Plain-text password shared by every user made with ``make_user``."""
    return TEST_PASSWORD
