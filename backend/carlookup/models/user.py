"""
CarLookup Backend: User & UserRole SQLAlchemy Models
=====================================================

What:  API accounts and their role assignments.
Who:   UserRepository (login), the seeder, Alembic.

Credentials:
    password_hash and salt are both base64 strings produced by
    PasswordService. The plain password is never stored.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carlookup.database import Base
from carlookup.models.car_make import utc_now
from carlookup.models.role import Role


class User(Base):
    """
    An account that can request tokens.

    Only rows with is_active = true can authenticate; UserRepository filters
    inactive users out of the login lookup.
    """

    __tablename__ = "users"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    salt: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user_roles: Mapped[List["UserRole"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    @property
    def role_names(self) -> List[str]:
        """Role names in assignment order. Requires user_roles/role to be loaded."""
        return [ur.role.name for ur in self.user_roles]

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', is_active={self.is_active})>"


class UserRole(Base):
    """Join row between User and Role, keyed by both ids."""

    __tablename__ = "user_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("roles.role_id", ondelete="CASCADE"), primary_key=True
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    user: Mapped[User] = relationship(back_populates="user_roles", lazy="raise")
    role: Mapped[Role] = relationship(lazy="raise")
