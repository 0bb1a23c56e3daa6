"""Query helpers for the users tables."""

from sqlalchemy import Select, select

from backend.app.db.models import UserRow
from backend.app.models.users import UserQuery


def select_user(query: UserQuery) -> Select[tuple[UserRow]]:
    """Build a select for the user matching query.

    Args:
        query: Lookup key; id wins over name/provider/scheme

    Returns:
        Select statement for at most one user row
    """
    if query.id is not None:
        return select(UserRow).where(UserRow.id == query.id)

    return select(UserRow).where(
        UserRow.name == query.name,
        UserRow.provider == query.provider,
        UserRow.scheme == query.scheme,
    )


def select_all_users() -> Select[tuple[UserRow]]:
    """Select every user in id order."""
    return select(UserRow).order_by(UserRow.id)
