"""Organization-scoped user store.

Wraps an unscoped UserStore so that every operation sees and changes only
the active organization's slice of each user:
- Reads return users reduced to their single role in the organization
- Users without a role in the organization are invisible
- Writes must carry exactly one complete role for the organization
- Writes merge into the full record, keeping other organizations' roles
"""

from backend.app.db.context import RequestContext
from backend.app.db.repositories import UserStore
from backend.app.errors import (
    InvalidContextError,
    UserNotFoundError,
    UserValidationError,
)
from backend.app.models.users import Role, User, UserQuery


# No-op defaults; the API wires in Prometheus metrics and structured logs
class UserStoreMetrics:
    """Interface for scoped user store metrics."""

    def record(self, op: str, outcome: str) -> None:
        """Count one operation outcome."""
        pass


class UserStoreLogger:
    """Interface for structured logging."""

    def log_operation(
        self,
        ctx: RequestContext,
        op: str,
        outcome: str,
        user_id: int | None = None,
        reason: str | None = None,
    ) -> None:
        """Log a scoped operation."""
        pass


def _scoped_view(user: User, role: Role) -> User:
    """Copy of user whose roles hold only the given role."""
    return user.model_copy(update={"roles": [role.model_copy()]})


def _with_role(user: User, role: Role) -> User:
    """Copy of user with role replacing its organization's entry, or appended."""
    roles: list[Role] = []
    replaced = False
    for existing in user.roles:
        if existing.organization == role.organization:
            roles.append(role.model_copy())
            replaced = True
        else:
            roles.append(existing.model_copy())
    if not replaced:
        roles.append(role.model_copy())
    return user.model_copy(update={"roles": roles})


class OrganizationUsersStore:
    """User store scoped to the organization of each request context.

    Holds no state besides the backing store. Mutations are read-modify-write
    against the backing store: the backing store is assumed to serialize
    writes to a record. Without that, concurrent mutations of one user from
    different organizations race and the last full-record write wins.
    """

    def __init__(
        self,
        store: UserStore,
        metrics: UserStoreMetrics | None = None,
        logger: UserStoreLogger | None = None,
    ) -> None:
        """Initialize scoped store.

        Args:
            store: Unscoped backing store
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
        """
        self._store = store
        self._metrics = metrics or UserStoreMetrics()
        self._logger = logger or UserStoreLogger()

    def get(self, ctx: RequestContext, query: UserQuery) -> User:
        """Get a user as seen from the active organization.

        Raises:
            InvalidContextError: If ctx has no organization
            UserNotFoundError: If no user matches or it has no role in the organization
        """
        org_id = self._organization(ctx, "get")

        user = self._lookup(ctx, "get", query)
        role = user.role_for(org_id)
        if role is None:
            self._reject(ctx, "get", "not_found", user.id, "no role in organization")
            raise UserNotFoundError("user not found")

        self._metrics.record("get", "ok")
        return _scoped_view(user, role)

    def add(self, ctx: RequestContext, user: User) -> User:
        """Add a user to the active organization.

        Creates the user when its name/provider/scheme is unknown, otherwise
        grants the role on the existing record.

        Returns:
            Scoped view of the stored user

        Raises:
            InvalidContextError: If ctx has no organization
            UserValidationError: If roles are not exactly one complete role for the organization
        """
        org_id = self._organization(ctx, "add")
        role = self._validate_role(ctx, "add", org_id, user)

        try:
            existing = self._store.get(UserQuery.by_identity(user))
        except UserNotFoundError:
            return self._create_user(ctx, user, role)

        return self._grant_organization_role(ctx, existing, role)

    def update(self, ctx: RequestContext, user: User) -> None:
        """Replace the active organization's role on a stored user.

        Raises:
            InvalidContextError: If ctx has no organization
            UserValidationError: If roles are not exactly one complete role for the organization
            UserNotFoundError: If no user has user.id
        """
        org_id = self._organization(ctx, "update")
        role = self._validate_role(ctx, "update", org_id, user)

        current = self._lookup_by_id(ctx, "update", user)
        self._store.update(_with_role(current, role))

        self._metrics.record("update", "ok")
        self._logger.log_operation(ctx, "update", "ok", user_id=current.id)

    def delete(self, ctx: RequestContext, user: User) -> None:
        """Remove a user from the active organization.

        The whole record is deleted once the user belongs to no organization.
        A user that exists but holds no role in the organization is left
        untouched without error; callers that must not reveal such users
        look them up with get first, as the HTTP routes do.

        Raises:
            InvalidContextError: If ctx has no organization
            UserNotFoundError: If no user has user.id
        """
        org_id = self._organization(ctx, "delete")

        current = self._lookup_by_id(ctx, "delete", user)
        if current.role_for(org_id) is None:
            self._metrics.record("delete", "ok")
            return

        remaining = [role for role in current.roles if role.organization != org_id]

        if remaining:
            self._store.update(current.model_copy(update={"roles": remaining}))
            self._logger.log_operation(ctx, "prune", "ok", user_id=current.id)
        else:
            self._store.delete(current)
            self._logger.log_operation(ctx, "delete", "ok", user_id=current.id)

        self._metrics.record("delete", "ok")

    def all(self, ctx: RequestContext) -> list[User]:
        """List users with a role in the active organization, in store order.

        Raises:
            InvalidContextError: If ctx has no organization
        """
        org_id = self._organization(ctx, "all")

        users: list[User] = []
        for user in self._store.all():
            role = user.role_for(org_id)
            if role is not None:
                users.append(_scoped_view(user, role))

        self._metrics.record("all", "ok")
        return users

    def _create_user(self, ctx: RequestContext, user: User, role: Role) -> User:
        """Store a new identity holding only the validated role."""
        stored = self._store.add(user.model_copy(update={"id": None, "roles": [role]}))

        self._metrics.record("add", "ok")
        self._logger.log_operation(ctx, "add", "ok", user_id=stored.id)
        return _scoped_view(stored, role)

    def _grant_organization_role(self, ctx: RequestContext, existing: User, role: Role) -> User:
        """Grant the validated role on an identity stored for other organizations."""
        self._store.update(_with_role(existing, role))

        self._metrics.record("add", "ok")
        self._logger.log_operation(ctx, "grant", "ok", user_id=existing.id)
        return _scoped_view(existing, role)

    def _organization(self, ctx: RequestContext, op: str) -> str:
        """Active organization of ctx, or InvalidContextError."""
        if ctx is None or not ctx.has_organization:
            self._metrics.record(op, "invalid_context")
            self._logger.log_operation(
                ctx or RequestContext(), op, "invalid_context", reason="no organization"
            )
            raise InvalidContextError("request context has no organization")
        return ctx.org_id

    def _validate_role(self, ctx: RequestContext, op: str, org_id: str, user: User) -> Role:
        """Return the single complete role for org_id carried by user."""
        reason: str | None = None
        if len(user.roles) != 1:
            reason = f"expected exactly one role, got {len(user.roles)}"
        elif not user.roles[0].is_complete:
            reason = "role organization and name are required"
        elif user.roles[0].organization != org_id:
            reason = f"role organization {user.roles[0].organization!r} does not match {org_id!r}"

        if reason is not None:
            self._reject(ctx, op, "invalid", user.id, reason)
            raise UserValidationError(reason)

        return user.roles[0]

    def _lookup(self, ctx: RequestContext, op: str, query: UserQuery) -> User:
        """Unscoped lookup that records not-found outcomes."""
        try:
            return self._store.get(query)
        except UserNotFoundError:
            self._reject(ctx, op, "not_found", query.id, "no such user")
            raise

    def _lookup_by_id(self, ctx: RequestContext, op: str, user: User) -> User:
        """Unscoped lookup of user.id."""
        if user.id is None:
            self._reject(ctx, op, "not_found", None, "user has no id")
            raise UserNotFoundError("user not found")
        return self._lookup(ctx, op, UserQuery.by_id(user.id))

    def _reject(
        self, ctx: RequestContext, op: str, outcome: str, user_id: int | None, reason: str
    ) -> None:
        self._metrics.record(op, outcome)
        self._logger.log_operation(ctx, op, outcome, user_id=user_id, reason=reason)
