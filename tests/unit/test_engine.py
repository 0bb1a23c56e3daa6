"""Unit tests for engine construction from settings."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from backend.app.config import Settings
from backend.app.db.engine import create_engine_from_settings
from backend.app.db.models import Base


def test_engine_requires_database_url() -> None:
    """Test that an unset database URL is rejected."""
    with pytest.raises(ValueError, match="DATABASE_URL"):
        create_engine_from_settings(Settings(database_url=None))


def test_in_memory_sqlite_uses_single_connection() -> None:
    """Test that in-memory SQLite shares one connection across sessions."""
    engine = create_engine_from_settings(Settings(database_url="sqlite://"))

    assert isinstance(engine.pool, StaticPool)

    Base.metadata.create_all(engine)
    assert {"users", "user_roles"} <= set(inspect(engine).get_table_names())
    engine.dispose()


def test_backing_store_is_in_memory_without_database(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that no DATABASE_URL selects the process-wide in-memory store."""
    from backend.app.db import stores
    from backend.app.db.inmemory import InMemoryUserStore

    monkeypatch.setattr(stores, "get_settings", lambda: Settings(database_url=None))

    dependency = stores.get_backing_store()
    assert isinstance(next(dependency), InMemoryUserStore)
    dependency.close()


def test_backing_store_is_sql_with_database(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that DATABASE_URL selects a session-bound SQL store."""
    from backend.app.db import stores
    from backend.app.db.sql_repositories import SqlUserStore

    settings = Settings(database_url="sqlite://")
    engine = create_engine_from_settings(settings)
    Base.metadata.create_all(engine)
    monkeypatch.setattr(stores, "get_settings", lambda: settings)
    monkeypatch.setattr(stores, "get_engine", lambda: engine)

    dependency = stores.get_backing_store()
    store = next(dependency)
    assert isinstance(store, SqlUserStore)
    assert store.all() == []
    dependency.close()
    engine.dispose()
