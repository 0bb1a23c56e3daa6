"""Dev seeding helper for the user store."""

from backend.app.db.repositories import UserStore
from backend.app.errors import UserNotFoundError
from backend.app.models.users import Role, User, UserQuery

DEV_ORG_ID = "default"

DEV_USERS = [
    User(
        name="admin",
        provider="github",
        scheme="oauth2",
        roles=[Role(organization=DEV_ORG_ID, name="admin")],
    ),
    User(
        name="viewer",
        provider="github",
        scheme="oauth2",
        roles=[Role(organization=DEV_ORG_ID, name="viewer")],
    ),
]


def seed_dev_users(store: UserStore) -> list[User]:
    """Seed dev users into the backing store.

    This function is idempotent - users that already exist by
    name/provider/scheme are left untouched.

    Returns:
        Stored dev users
    """
    seeded: list[User] = []
    for user in DEV_USERS:
        try:
            seeded.append(store.get(UserQuery.by_identity(user)))
        except UserNotFoundError:
            print(f"Creating dev user {user.name}...")
            seeded.append(store.add(user))

    print("✅ Dev seeding complete")
    return seeded


if __name__ == "__main__":
    from backend.app.db.engine import create_session_factory, get_engine
    from backend.app.db.sql_repositories import SqlUserStore

    with create_session_factory(get_engine())() as session:
        seed_dev_users(SqlUserStore(session))
