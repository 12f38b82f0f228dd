"""
CarLookup Backend: CarMake Repository
======================================

What:  Query and persistence operations for car makes.
Who:   Owned by the UnitOfWork; called by CarMakeManager and CarModelManager.

Repositories never commit. They stage changes on the unit of work's session
and read through it, so everything a manager does lands in one transaction.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carlookup.models.car_make import CarMake
from carlookup.repositories.patterns import to_contains_pattern

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class CarMakeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(
        self,
        page: int,
        page_size: int,
        name_contains: Optional[str] = None,
    ) -> Tuple[List[CarMake], int]:
        """
        One page of makes ordered by name, plus the total number of matches.

        The count runs against the filtered query before offset/limit so
        pagination metadata reflects every match, not just this page.
        """
        stmt = select(CarMake)
        if name_contains and name_contains.strip():
            pattern = to_contains_pattern(name_contains, escape_char=LIKE_ESCAPE)
            stmt = stmt.where(CarMake.name.ilike(pattern, escape=LIKE_ESCAPE))

        total = await self.session.scalar(
            select(func.count()).select_from(stmt.subquery())
        ) or 0

        if total == 0:
            return [], 0

        result = await self.session.scalars(
            stmt.order_by(CarMake.name)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        items = list(result.all())
        logger.debug(
            "Listed %d of %d car makes (page=%d, size=%d, filter=%r)",
            len(items), total, page, page_size, name_contains,
        )
        return items, total

    async def get_by_id(self, make_id: uuid.UUID) -> Optional[CarMake]:
        return await self.session.get(CarMake, make_id)

    async def exists_by_name(
        self,
        name: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> bool:
        """Case-insensitive exact match on the trimmed name, optionally ignoring one id."""
        stmt = select(CarMake.make_id).where(
            func.lower(CarMake.name) == func.lower(name.strip())
        )
        if exclude_id is not None:
            stmt = stmt.where(CarMake.make_id != exclude_id)
        found = await self.session.scalar(stmt.limit(1))
        return found is not None

    async def create(self, car_make: CarMake) -> CarMake:
        self.session.add(car_make)
        return car_make

    async def update(self, car_make: CarMake) -> CarMake:
        # Loaded through this session, so the change is already tracked
        self.session.add(car_make)
        return car_make

    async def delete(self, make_id: uuid.UUID) -> None:
        car_make = await self.get_by_id(make_id)
        if car_make is None:
            return
        await self.session.delete(car_make)
