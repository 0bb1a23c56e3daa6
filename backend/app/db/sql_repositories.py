"""SQL implementation of the user store."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db.models import RoleRow, UserRow
from backend.app.db.queries import select_all_users, select_user
from backend.app.db.repositories import ensure_distinct_organizations
from backend.app.errors import UserExistsError, UserNotFoundError, UserQueryError
from backend.app.models.users import Role, User, UserQuery


def _to_user(row: UserRow) -> User:
    """Convert a user row and its roles to the domain model."""
    return User(
        id=row.id,
        name=row.name,
        provider=row.provider,
        scheme=row.scheme,
        roles=[Role(organization=role.organization, name=role.name) for role in row.roles],
    )


class SqlUserStore:
    """SQL implementation of UserStore.

    Each write commits the session; concurrent writers to the same row are
    serialized by the database.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, query: UserQuery) -> User:
        """Get a user by id or by name/provider/scheme."""
        if query.id is None and not query.has_identity:
            raise UserQueryError("query must specify an id or name, provider and scheme")

        row = self._session.scalars(select_user(query)).first()

        if row is None:
            key = query.id if query.id is not None else repr(query.name)
            raise UserNotFoundError(f"user {key} not found")

        return _to_user(row)

    def add(self, user: User) -> User:
        """Add a new user and assign its id."""
        ensure_distinct_organizations(user)
        if self._session.scalars(select_user(UserQuery.by_identity(user))).first() is not None:
            raise UserExistsError(f"user {user.name!r} already exists")

        row = UserRow(
            name=user.name,
            provider=user.provider,
            scheme=user.scheme,
            roles=[
                RoleRow(organization=role.organization, name=role.name, position=position)
                for position, role in enumerate(user.roles)
            ],
        )

        self._session.add(row)
        self._commit()

        return _to_user(row)

    def update(self, user: User) -> None:
        """Replace a stored user's fields and roles."""
        row = self._get_row(user)
        ensure_distinct_organizations(user)

        clash = self._session.scalars(select_user(UserQuery.by_identity(user))).first()
        if clash is not None and clash.id != row.id:
            raise UserExistsError(f"user {user.name!r} already exists")

        row.name = user.name
        row.provider = user.provider
        row.scheme = user.scheme

        # Reuse rows per organization so the (user_id, organization) constraint
        # never sees a transient duplicate during flush
        existing = {role.organization: role for role in row.roles}
        roles: list[RoleRow] = []
        for position, role in enumerate(user.roles):
            role_row = existing.pop(role.organization, None)
            if role_row is None:
                role_row = RoleRow(organization=role.organization)
            role_row.name = role.name
            role_row.position = position
            roles.append(role_row)
        row.roles = roles

        self._commit()

    def delete(self, user: User) -> None:
        """Delete a stored user and its roles."""
        row = self._get_row(user)
        self._session.delete(row)
        self._commit()

    def all(self) -> list[User]:
        """List users in id order."""
        return [_to_user(row) for row in self._session.scalars(select_all_users()).all()]

    def _commit(self) -> None:
        """Commit, rolling back the session if the database rejects it."""
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def _get_row(self, user: User) -> UserRow:
        """Load the row for user.id or raise UserNotFoundError."""
        if user.id is None:
            raise UserNotFoundError("user has no id")

        row = self._session.get(UserRow, user.id)
        if row is None:
            raise UserNotFoundError(f"user {user.id} not found")

        return row
