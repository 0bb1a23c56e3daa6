"""Shared pytest fixtures for all test suites."""

from collections.abc import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.app.db.inmemory import InMemoryUserStore
from backend.app.db.models import Base
from backend.app.db.repositories import UserStore
from backend.app.db.sql_repositories import SqlUserStore


@pytest.fixture
def sql_session() -> Generator[Session, None, None]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    with Session(engine, expire_on_commit=False) as session:
        yield session

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def backing_store(request: pytest.FixtureRequest) -> UserStore:
    """Unscoped user store, once per implementation."""
    if request.param == "memory":
        return InMemoryUserStore()
    return SqlUserStore(request.getfixturevalue("sql_session"))
