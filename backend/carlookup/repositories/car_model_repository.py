"""
CarLookup Backend: CarModel Repository
=======================================

Listing is always scoped to one make and ordered by name, then model year.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carlookup.models.car_model import CarModel
from carlookup.repositories.car_make_repository import LIKE_ESCAPE
from carlookup.repositories.patterns import to_contains_pattern

logger = logging.getLogger(__name__)


class CarModelRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_make(
        self,
        make_id: uuid.UUID,
        page: int,
        page_size: int,
        name_contains: Optional[str] = None,
        year: Optional[int] = None,
    ) -> Tuple[List[CarModel], int]:
        stmt = select(CarModel).where(CarModel.make_id == make_id)
        if name_contains and name_contains.strip():
            pattern = to_contains_pattern(name_contains, escape_char=LIKE_ESCAPE)
            stmt = stmt.where(CarModel.name.ilike(pattern, escape=LIKE_ESCAPE))
        if year is not None:
            stmt = stmt.where(CarModel.model_year == year)

        total = await self.session.scalar(
            select(func.count()).select_from(stmt.subquery())
        ) or 0
        if total == 0:
            return [], 0

        result = await self.session.scalars(
            stmt.order_by(CarModel.name, CarModel.model_year)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        items = list(result.all())
        logger.debug(
            "Listed %d of %d car models for make %s (page=%d, size=%d)",
            len(items), total, make_id, page, page_size,
        )
        return items, total

    async def get_by_id(self, model_id: uuid.UUID) -> Optional[CarModel]:
        return await self.session.get(CarModel, model_id)

    async def exists_by_name_make_and_year(
        self,
        name: str,
        make_id: uuid.UUID,
        model_year: int,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> bool:
        stmt = select(CarModel.model_id).where(
            CarModel.make_id == make_id,
            CarModel.model_year == model_year,
            func.lower(CarModel.name) == func.lower(name.strip()),
        )
        if exclude_id is not None:
            stmt = stmt.where(CarModel.model_id != exclude_id)
        return await self.session.scalar(stmt.limit(1)) is not None

    async def has_models_for_make(self, make_id: uuid.UUID) -> bool:
        stmt = select(CarModel.model_id).where(CarModel.make_id == make_id).limit(1)
        return await self.session.scalar(stmt) is not None

    async def create(self, car_model: CarModel) -> CarModel:
        self.session.add(car_model)
        return car_model

    async def update(self, car_model: CarModel) -> CarModel:
        self.session.add(car_model)
        return car_model

    async def delete(self, model_id: uuid.UUID) -> None:
        car_model = await self.get_by_id(model_id)
        if car_model is None:
            return
        await self.session.delete(car_model)
