"""Backing user store selection."""

from collections.abc import Generator

from backend.app.config import get_settings
from backend.app.db.engine import create_session_factory, get_engine
from backend.app.db.inmemory import InMemoryUserStore
from backend.app.db.repositories import UserStore
from backend.app.db.sql_repositories import SqlUserStore

# Process-wide store used when no database is configured
_memory_store = InMemoryUserStore()


def get_backing_store() -> Generator[UserStore, None, None]:
    """FastAPI dependency for the unscoped backing store.

    Yields:
        SqlUserStore bound to a fresh session when DATABASE_URL is set,
        otherwise the in-memory store
    """
    if not get_settings().database_url:
        yield _memory_store
        return

    with create_session_factory(get_engine())() as session:
        yield SqlUserStore(session)
