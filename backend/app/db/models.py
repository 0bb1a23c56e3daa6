"""SQLAlchemy ORM models for user accounts and organization roles."""

from sqlalchemy import ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UserRow(Base):
    """User table - one row per identity across all organizations."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("name", "provider", "scheme", name="uq_users_identity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    provider: Mapped[str] = mapped_column(Text, nullable=False, default="")
    scheme: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    roles: Mapped[list["RoleRow"]] = relationship(
        "RoleRow",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="RoleRow.position",
    )


class RoleRow(Base):
    """Role table - a user's role within one organization."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "organization", name="uq_user_roles_org"),
        Index("idx_user_roles_org", "organization"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    organization: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    user: Mapped["UserRow"] = relationship("UserRow", back_populates="roles")
