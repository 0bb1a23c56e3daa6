"""Integration tests for Alembic migrations."""

from collections.abc import Generator
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from backend.app.config import get_settings

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "backend" / "app" / "db" / "alembic"


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """File-backed SQLite URL exposed through settings."""
    url = f"sqlite:///{tmp_path / 'users.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


def test_upgrade_creates_user_tables(database_url: str) -> None:
    """Test that upgrade head creates users and user_roles."""
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))

    command.upgrade(config, "head")

    engine = create_engine(database_url)
    inspector = inspect(engine)
    assert {"users", "user_roles"} <= set(inspector.get_table_names())
    assert {column["name"] for column in inspector.get_columns("user_roles")} >= {
        "user_id",
        "organization",
        "name",
        "position",
    }

    command.downgrade(config, "base")
    assert "users" not in inspect(engine).get_table_names()
    engine.dispose()
