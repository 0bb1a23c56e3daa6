"""User account and role models."""

from pydantic import BaseModel, Field


class Role(BaseModel):
    """Named role held by a user within one organization."""

    organization: str = ""
    name: str = ""

    @property
    def is_complete(self) -> bool:
        """Both organization and name are set."""
        return bool(self.organization) and bool(self.name)


class User(BaseModel):
    """User account with roles across organizations.

    The id is assigned by the backing store on add and never changes.
    """

    id: int | None = None
    name: str
    provider: str = ""
    scheme: str = ""
    roles: list[Role] = Field(default_factory=list)

    def role_for(self, organization: str) -> Role | None:
        """Return the role held in organization, if any."""
        for role in self.roles:
            if role.organization == organization:
                return role
        return None


class UserQuery(BaseModel):
    """Lookup key for a stored user: by id, or by name/provider/scheme."""

    id: int | None = None
    name: str | None = None
    provider: str | None = None
    scheme: str | None = None

    @classmethod
    def by_id(cls, user_id: int) -> "UserQuery":
        """Query by store-assigned id."""
        return cls(id=user_id)

    @classmethod
    def by_identity(cls, user: User) -> "UserQuery":
        """Query by the user's name/provider/scheme tuple."""
        return cls(name=user.name, provider=user.provider, scheme=user.scheme)

    @property
    def has_identity(self) -> bool:
        """Name, provider and scheme are all given."""
        return self.name is not None and self.provider is not None and self.scheme is not None
