# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from linkhub.core.settings import Settings
from linkhub.db.session import build_engine, build_session_factory, create_tables, drop_tables
from linkhub.main import create_app
from linkhub.models import User
from linkhub.repositories import PostMemoryRepository, UserSQLRepository
from linkhub.services import SessionManager

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def test_settings() -> Settings:
    """Settings pointing every store at throwaway backends."""
    return Settings(
        secret_key="test-secret-key",
        database_url=TEST_DB_URL,
        post_backend="memory",
        user_backend="sql",
    )


@pytest.fixture()
def engine(test_settings: Settings) -> Iterator[Engine]:
    engine = build_engine(test_settings)
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture()
def session_manager(test_settings: Settings, session_factory: sessionmaker[Session]) -> SessionManager:
    return SessionManager.from_settings(test_settings, session_factory)


@pytest.fixture()
def user_repo(session_factory: sessionmaker[Session]) -> UserSQLRepository:
    return UserSQLRepository(session_factory)


@pytest.fixture()
def post_repo() -> PostMemoryRepository:
    return PostMemoryRepository()


@pytest.fixture()
def app(
    test_settings: Settings,
    post_repo: PostMemoryRepository,
    user_repo: UserSQLRepository,
    session_manager: SessionManager,
) -> FastAPI:
    return create_app(
        test_settings,
        post_repo=post_repo,
        user_repo=user_repo,
        session_manager=session_manager,
    )


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def alice(user_repo: UserSQLRepository) -> User:
    """Return a registered user."""
    return user_repo.sign_up("alice", "alice-password")


@pytest.fixture()
def bob(user_repo: UserSQLRepository) -> User:
    """Return a second registered user."""
    return user_repo.sign_up("bob", "bob-password")


@pytest.fixture()
def alice_headers(session_manager: SessionManager, alice: User) -> dict[str, str]:
    """Return authorization headers for alice."""
    return {"Authorization": f"Bearer {session_manager.create(alice).token}"}


@pytest.fixture()
def bob_headers(session_manager: SessionManager, bob: User) -> dict[str, str]:
    """Return authorization headers for bob."""
    return {"Authorization": f"Bearer {session_manager.create(bob).token}"}
