"""Models package - re-exports for convenience."""

from backend.app.models.users import Role, User, UserQuery

__all__ = ["Role", "User", "UserQuery"]
