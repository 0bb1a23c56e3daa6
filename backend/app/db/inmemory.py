"""In-memory implementation of the user store."""

import threading

from backend.app.db.repositories import ensure_distinct_organizations
from backend.app.errors import UserExistsError, UserNotFoundError, UserQueryError
from backend.app.models.users import User, UserQuery


def _identity(user: User) -> tuple[str, str, str]:
    return (user.name, user.provider, user.scheme)


class InMemoryUserStore:
    """In-memory implementation of UserStore.

    Records are copied in and out so callers never hold stored state.
    Each call holds a lock, so writes to a record are serialized across
    request threads.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, query: UserQuery) -> User:
        """Get a user by id or by name/provider/scheme."""
        if query.id is None and not query.has_identity:
            raise UserQueryError("query must specify an id or name, provider and scheme")

        with self._lock:
            if query.id is not None:
                user = self._users.get(query.id)
                if user is None:
                    raise UserNotFoundError(f"user {query.id} not found")
                return user.model_copy(deep=True)

            identity = (query.name, query.provider, query.scheme)
            for user in self._users.values():
                if _identity(user) == identity:
                    return user.model_copy(deep=True)

        raise UserNotFoundError(f"user {query.name!r} not found")

    def add(self, user: User) -> User:
        """Add a new user and assign its id."""
        ensure_distinct_organizations(user)

        with self._lock:
            if self._find_identity(user) is not None:
                raise UserExistsError(f"user {user.name!r} already exists")

            stored = user.model_copy(deep=True, update={"id": self._next_id})
            self._users[self._next_id] = stored
            self._next_id += 1

        return stored.model_copy(deep=True)

    def update(self, user: User) -> None:
        """Replace a stored user."""
        ensure_distinct_organizations(user)

        with self._lock:
            if user.id is None or user.id not in self._users:
                raise UserNotFoundError(f"user {user.id} not found")

            # Identity must stay unique across other users
            existing = self._find_identity(user)
            if existing is not None and existing != user.id:
                raise UserExistsError(f"user {user.name!r} already exists")

            self._users[user.id] = user.model_copy(deep=True)

    def delete(self, user: User) -> None:
        """Delete a stored user."""
        with self._lock:
            if user.id is None or user.id not in self._users:
                raise UserNotFoundError(f"user {user.id} not found")
            del self._users[user.id]

    def all(self) -> list[User]:
        """List users in insertion order."""
        with self._lock:
            return [user.model_copy(deep=True) for user in self._users.values()]

    def _find_identity(self, user: User) -> int | None:
        """Return the id of the user sharing name/provider/scheme, if any.

        Caller holds the lock.
        """
        for user_id, stored in self._users.items():
            if _identity(stored) == _identity(user):
                return user_id
        return None
