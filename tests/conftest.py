# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from mediaroom.core.security import create_access_token
from mediaroom.db.session import Base, build_engine, create_tables
from mediaroom.db.session import get_db as app_get_session
from mediaroom.main import app as fastapi_app
from mediaroom.models import Content, User

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    create_tables(engine)
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
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with unique usernames."""

    def _make_user(username: str | None = None, display_name: str | None = None) -> User:
        handle = username or f"user{next(_USERNAME_COUNTER)}"
        user = User(username=handle, display_name=display_name or handle.title())
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_content(db_session: Session) -> Callable[..., Content]:
    """Return a factory persisting content rows with explicit counters."""

    def _make_content(author: User, **overrides: Any) -> Content:
        values: dict[str, Any] = {
            "author_id": author.id,
            "kind": "text",
            "title": "A post",
            "description": None,
            "media_url": None,
            "thumbnail_url": None,
            "like_count": 0,
            "view_count": 0,
        }
        values.update(overrides)
        content = Content(**values)
        db_session.add(content)
        db_session.commit()
        return content

    return _make_content


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice", "Alice Liddell")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob", "Bob Builder")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol", "Carol Danvers")


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers_for(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers_for(bob)
