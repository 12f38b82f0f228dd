"""
CarLookup Backend: Role SQLAlchemy Model
=========================================

Roles are reference data: `admin`, `editor` and `reader`, created by the
seeder or the initial migration. Policies in security.py list role names
explicitly; there is no hierarchy stored here.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from carlookup.database import Base
from carlookup.models.car_make import utc_now


class Role(Base):
    __tablename__ = "roles"

    role_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Role(name='{self.name}')>"
