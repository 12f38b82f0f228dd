"""
CarLookup Backend: CarModel SQLAlchemy Model
=============================================

What:  ORM model representing the `car_models` table.
Who:   Used by CarModelRepository, both managers, the seeder and Alembic.

Uniqueness: (make_id, name, model_year). The same model name may appear for
several years of one make, and for several makes.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carlookup.database import Base
from carlookup.models.car_make import utc_now

if TYPE_CHECKING:
    from carlookup.models.car_make import CarMake


class CarModel(Base):
    """A model produced by a make in a given model year."""

    __tablename__ = "car_models"

    model_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    make_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("car_makes.make_id", ondelete="RESTRICT"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    model_year: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    make: Mapped["CarMake"] = relationship(back_populates="models", lazy="raise")

    __table_args__ = (
        UniqueConstraint("make_id", "name", "model_year", name="uq_car_models_make_name_year"),
        Index("ix_car_models_make_id", "make_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<CarModel(model_id={self.model_id}, name='{self.name}', "
            f"model_year={self.model_year})>"
        )
