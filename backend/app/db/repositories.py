"""Repository protocol interfaces for data access."""

from typing import Protocol

from backend.app.errors import UserValidationError
from backend.app.models.users import User, UserQuery


class UserStore(Protocol):
    """Unscoped user account store.

    Every method operates on full records holding roles for all
    organizations. Implementations enforce unique name/provider/scheme
    and at most one role per organization on each user.
    """

    def get(self, query: UserQuery) -> User:
        """Get a user by id or by name/provider/scheme.

        Args:
            query: Lookup key

        Returns:
            Stored user

        Raises:
            UserNotFoundError: If no user matches
            UserQueryError: If the query has no usable key
        """
        ...

    def add(self, user: User) -> User:
        """Add a new user.

        Args:
            user: User to store (id is ignored)

        Returns:
            Stored user with its assigned id

        Raises:
            UserExistsError: If name/provider/scheme is taken
        """
        ...

    def update(self, user: User) -> None:
        """Replace a stored user's fields and roles.

        Args:
            user: User with id set

        Raises:
            UserNotFoundError: If no user has that id
        """
        ...

    def delete(self, user: User) -> None:
        """Delete a stored user.

        Args:
            user: User with id set

        Raises:
            UserNotFoundError: If no user has that id
        """
        ...

    def all(self) -> list[User]:
        """List every stored user in store order."""
        ...


def ensure_distinct_organizations(user: User) -> None:
    """Reject a user holding more than one role in the same organization.

    Raises:
        UserValidationError: If an organization appears twice in roles
    """
    seen: set[str] = set()
    for role in user.roles:
        if role.organization in seen:
            raise UserValidationError(
                f"user {user.name!r} has more than one role in organization {role.organization!r}"
            )
        seen.add(role.organization)
