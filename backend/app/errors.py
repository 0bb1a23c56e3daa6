"""User store exception types."""


class UserStoreError(Exception):
    """Base class for user store failures."""

    pass


class InvalidContextError(UserStoreError):
    """Request context carries no organization."""

    pass


class UserValidationError(UserStoreError):
    """Supplied user or roles violate the organization rules."""

    pass


class UserNotFoundError(UserStoreError):
    """No user matches the query within the visible scope."""

    pass


class UserExistsError(UserStoreError):
    """A user with the same name, provider and scheme is already stored."""

    pass


class UserQueryError(UserStoreError):
    """Query names neither an id nor a full name/provider/scheme tuple."""

    pass
