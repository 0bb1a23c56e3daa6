"""Tests for organization isolation across scoped stores sharing one backing store."""

from backend.app.db.context import RequestContext
from backend.app.db.repositories import UserStore
from backend.app.models.users import Role, User, UserQuery
from backend.app.organizations.users import OrganizationUsersStore


def test_organizations_see_only_their_own_roles(backing_store: UserStore) -> None:
    """Test that two organizations share an identity without seeing each other."""
    users = OrganizationUsersStore(backing_store)
    ctx_a = RequestContext(org_id="org-a")
    ctx_b = RequestContext(org_id="org-b")

    # Same identity joins both organizations
    added_a = users.add(
        ctx_a,
        User(
            name="marty",
            provider="github",
            scheme="oauth2",
            roles=[Role(organization="org-a", name="editor")],
        ),
    )
    added_b = users.add(
        ctx_b,
        User(
            name="marty",
            provider="github",
            scheme="oauth2",
            roles=[Role(organization="org-b", name="viewer")],
        ),
    )
    assert added_a.id == added_b.id

    # Each organization sees only its own role
    assert users.get(ctx_a, UserQuery.by_id(added_a.id)).roles == [
        Role(organization="org-a", name="editor")
    ]
    assert users.get(ctx_b, UserQuery.by_id(added_a.id)).roles == [
        Role(organization="org-b", name="viewer")
    ]

    # org_a changes its role without touching org_b's
    users.update(
        ctx_a,
        User(id=added_a.id, name="marty", roles=[Role(organization="org-a", name="admin")]),
    )
    assert users.get(ctx_b, UserQuery.by_id(added_a.id)).roles == [
        Role(organization="org-b", name="viewer")
    ]

    # org_a removes the user; org_b still has it
    users.delete(ctx_a, added_a)
    assert users.all(ctx_a) == []
    assert [user.name for user in users.all(ctx_b)] == ["marty"]

    # org_b removes the user; the identity is gone
    users.delete(ctx_b, added_b)
    assert backing_store.all() == []


def test_list_never_leaks_other_organizations(backing_store: UserStore) -> None:
    """Test that listing only returns the scoped organization's roles."""
    users = OrganizationUsersStore(backing_store)
    backing_store.add(
        User(
            name="howdy",
            provider="github",
            scheme="oauth2",
            roles=[
                Role(organization="1338", name="viewer"),
                Role(organization="1336", name="viewer"),
            ],
        )
    )

    for org_id in ("1338", "1336"):
        listed = users.all(RequestContext(org_id=org_id))
        assert len(listed) == 1
        assert [role.organization for role in listed[0].roles] == [org_id]
