"""
CarLookup Backend: CarMake Manager (Business Logic)
====================================================

What:  Car make use cases: list, get, create, update, delete, and the
       models-of-a-make listing.
Why:   Keeps business rules (uniqueness, delete guard, 404s) out of routes.
How:   Validate → check → mutate → project. Writes run inside
       `UnitOfWork.execute_in_transaction`, so the existence checks and the
       write share one transaction.
Who:   Called by routes/car_makes.py.

Errors are raised, never caught here: ValidationError (400),
NotFoundError (404), ConflictError (409). The mapping chain renders them.
"""

import logging
import uuid
from typing import Any, Dict

from carlookup.exceptions import ConflictError, NotFoundError
from carlookup.models.car_make import CarMake, utc_now
from carlookup.schemas.car import CarMakeRequest, CarMakeResponse, CarModelResponse
from carlookup.schemas.envelope import PagedResponse
from carlookup.schemas.pagination import CarModelPaginationQuery, PaginationQuery
from carlookup.services.pagination_service import PaginationService
from carlookup.unit_of_work import UnitOfWork
from carlookup.validators import (
    ensure_valid,
    validate_car_make_request,
    validate_car_model_pagination_query,
    validate_pagination_query,
)

logger = logging.getLogger(__name__)

CAR_MAKE = "CarMake"
CAR_MAKES_PATH = "/api/v1/carmakes"


class CarMakeManager:
    def __init__(
        self,
        uow: UnitOfWork,
        pagination: PaginationService,
        max_name_filter_length: int = 100,
    ):
        self.uow = uow
        self.pagination = pagination
        self.max_name_filter_length = max_name_filter_length

    # ── Queries ───────────────────────────────────────────────────────────
    async def list_car_makes(self, query: PaginationQuery) -> PagedResponse[CarMakeResponse]:
        logger.info("Listing car makes: %s", query.model_dump())
        ensure_valid(
            validate_pagination_query(
                query,
                max_page_size=self.pagination.max_page_size,
                max_name_filter_length=self.max_name_filter_length,
            )
        )

        clamped = self.pagination.clamp(query)
        items, total = await self.uow.car_makes.list(
            clamped.page, clamped.limit, clamped.name_contains
        )

        extra: Dict[str, Any] = {}
        if clamped.name_contains and clamped.name_contains.strip():
            extra["nameContains"] = clamped.name_contains

        page_info = self.pagination.build_page_info(
            clamped.page, clamped.limit, total, CAR_MAKES_PATH, extra or None
        )
        logger.info(
            "Retrieved %d car makes (page %d of %d)",
            len(items), page_info.current_page, page_info.total_pages,
        )
        return PagedResponse[CarMakeResponse](
            data=[CarMakeResponse.model_validate(item) for item in items],
            pagination=page_info,
        )

    async def get_car_make(self, make_id: uuid.UUID) -> CarMakeResponse:
        logger.info("Getting car make %s", make_id)
        car_make = await self.uow.car_makes.get_by_id(make_id)
        if car_make is None:
            raise NotFoundError(CAR_MAKE, make_id)
        return CarMakeResponse.model_validate(car_make)

    async def list_car_models(
        self,
        make_id: uuid.UUID,
        query: CarModelPaginationQuery,
    ) -> PagedResponse[CarModelResponse]:
        logger.info("Listing car models for make %s: %s", make_id, query.model_dump())
        ensure_valid(
            validate_car_model_pagination_query(
                query,
                max_page_size=self.pagination.max_page_size,
                max_name_filter_length=self.max_name_filter_length,
            )
        )

        if await self.uow.car_makes.get_by_id(make_id) is None:
            raise NotFoundError(CAR_MAKE, make_id)

        clamped = self.pagination.clamp(query)
        items, total = await self.uow.car_models.list_by_make(
            make_id,
            clamped.page,
            clamped.limit,
            name_contains=clamped.name_contains,
            year=clamped.year,
        )

        extra: Dict[str, Any] = {}
        if clamped.name_contains and clamped.name_contains.strip():
            extra["nameContains"] = clamped.name_contains
        if clamped.year is not None:
            extra["year"] = clamped.year

        page_info = self.pagination.build_page_info(
            clamped.page,
            clamped.limit,
            total,
            f"{CAR_MAKES_PATH}/{make_id}/carmodels",
            extra or None,
        )
        logger.info(
            "Retrieved %d car models for make %s (page %d of %d)",
            len(items), make_id, page_info.current_page, page_info.total_pages,
        )
        return PagedResponse[CarModelResponse](
            data=[CarModelResponse.model_validate(item) for item in items],
            pagination=page_info,
        )

    # ── Commands ──────────────────────────────────────────────────────────
    async def create_car_make(self, request: CarMakeRequest) -> CarMakeResponse:
        logger.info("Creating car make %r", request.name)

        async def operation() -> CarMakeResponse:
            ensure_valid(validate_car_make_request(request))
            name = request.name.strip()

            if await self.uow.car_makes.exists_by_name(name):
                raise ConflictError(f"A car make with the name '{name}' already exists.")

            car_make = CarMake(
                make_id=uuid.uuid4(),
                name=name,
                country_of_origin=request.country_of_origin.strip(),
                created_at=utc_now(),
            )
            await self.uow.car_makes.create(car_make)
            logger.info("Created car make %s (%s)", car_make.make_id, car_make.name)
            return CarMakeResponse.model_validate(car_make)

        return await self.uow.execute_in_transaction(operation)

    async def update_car_make(
        self,
        make_id: uuid.UUID,
        request: CarMakeRequest,
    ) -> CarMakeResponse:
        logger.info("Updating car make %s", make_id)

        async def operation() -> CarMakeResponse:
            ensure_valid(validate_car_make_request(request))
            name = request.name.strip()

            car_make = await self.uow.car_makes.get_by_id(make_id)
            if car_make is None:
                raise NotFoundError(CAR_MAKE, make_id)

            if await self.uow.car_makes.exists_by_name(name, exclude_id=make_id):
                raise ConflictError(f"A car make with the name '{name}' already exists.")

            car_make.name = name
            car_make.country_of_origin = request.country_of_origin.strip()
            car_make.updated_at = utc_now()
            await self.uow.car_makes.update(car_make)
            logger.info("Updated car make %s (%s)", car_make.make_id, car_make.name)
            return CarMakeResponse.model_validate(car_make)

        return await self.uow.execute_in_transaction(operation)

    async def delete_car_make(self, make_id: uuid.UUID) -> None:
        logger.info("Deleting car make %s", make_id)

        async def operation() -> None:
            if await self.uow.car_makes.get_by_id(make_id) is None:
                raise NotFoundError(CAR_MAKE, make_id)

            if await self.uow.car_models.has_models_for_make(make_id):
                raise ConflictError(
                    "Cannot delete car make because it has associated car models. "
                    "Delete the car models first."
                )

            await self.uow.car_makes.delete(make_id)
            logger.info("Deleted car make %s", make_id)

        await self.uow.execute_in_transaction(operation)
