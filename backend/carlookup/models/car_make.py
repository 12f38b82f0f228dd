"""
CarLookup Backend: CarMake SQLAlchemy Model
============================================

What:  ORM model representing the `car_makes` table.
Who:   Used by CarMakeRepository, CarMakeManager, the seeder and Alembic.

Table Design Rationale:
    - UUID primary key: stable identifiers that seed data can hard-code
    - name: unique regardless of case, enforced by a functional index on
      lower(name) so "toyota" and "Toyota" cannot coexist
    - updated_at: NULL until the first update
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carlookup.database import Base

if TYPE_CHECKING:
    from carlookup.models.car_model import CarModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CarMake(Base):
    """
    A car manufacturer.

    Lifecycle:
        Created and updated by CarMakeManager. Deletion is refused by the
        manager while any CarModel still references the make.
    """

    __tablename__ = "car_makes"

    make_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    country_of_origin: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # No ORM cascade: the delete guard lives in the manager
    models: Mapped[List["CarModel"]] = relationship(
        back_populates="make",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<CarMake(make_id={self.make_id}, name='{self.name}')>"


# ── Indexes ───────────────────────────────────────────────────────────────
Index("ux_car_makes_name_lower", func.lower(CarMake.name), unique=True)
