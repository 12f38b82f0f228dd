"""
CarLookup Backend: CarModel Manager (Business Logic)
=====================================================

Single-model use cases. Listing models lives on CarMakeManager because it is
always scoped to a make (GET /carmakes/{id}/carmodels).

Uniqueness is the (make, name, model year) triple; the check runs inside the
same transaction as the write, backed by the database unique constraint.
"""

import logging
import uuid

from carlookup.exceptions import ConflictError, NotFoundError
from carlookup.managers.car_make_manager import CAR_MAKE
from carlookup.models.car_model import CarModel
from carlookup.models.car_make import utc_now
from carlookup.schemas.car import CarModelRequest, CarModelResponse
from carlookup.unit_of_work import UnitOfWork
from carlookup.validators import ensure_valid, validate_car_model_request

logger = logging.getLogger(__name__)

CAR_MODEL = "CarModel"


def _duplicate_message(name: str, model_year: int) -> str:
    return (
        f"A car model with the name '{name}' for year {model_year} "
        "already exists for this car make."
    )


class CarModelManager:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_car_model(self, model_id: uuid.UUID) -> CarModelResponse:
        logger.info("Getting car model %s", model_id)
        car_model = await self.uow.car_models.get_by_id(model_id)
        if car_model is None:
            raise NotFoundError(CAR_MODEL, model_id)
        return CarModelResponse.model_validate(car_model)

    async def create_car_model(self, request: CarModelRequest) -> CarModelResponse:
        logger.info("Creating car model %r (%s) for make %s",
                    request.name, request.model_year, request.make_id)

        async def operation() -> CarModelResponse:
            ensure_valid(validate_car_model_request(request))
            name = request.name.strip()

            if await self.uow.car_makes.get_by_id(request.make_id) is None:
                raise NotFoundError(CAR_MAKE, request.make_id)

            if await self.uow.car_models.exists_by_name_make_and_year(
                name, request.make_id, request.model_year
            ):
                raise ConflictError(_duplicate_message(name, request.model_year))

            car_model = CarModel(
                model_id=uuid.uuid4(),
                make_id=request.make_id,
                name=name,
                model_year=request.model_year,
                created_at=utc_now(),
            )
            await self.uow.car_models.create(car_model)
            logger.info("Created car model %s (%s %d)",
                        car_model.model_id, car_model.name, car_model.model_year)
            return CarModelResponse.model_validate(car_model)

        return await self.uow.execute_in_transaction(operation)

    async def update_car_model(
        self,
        model_id: uuid.UUID,
        request: CarModelRequest,
    ) -> CarModelResponse:
        logger.info("Updating car model %s", model_id)

        async def operation() -> CarModelResponse:
            ensure_valid(validate_car_model_request(request))
            name = request.name.strip()

            car_model = await self.uow.car_models.get_by_id(model_id)
            if car_model is None:
                raise NotFoundError(CAR_MODEL, model_id)

            if car_model.make_id != request.make_id:
                if await self.uow.car_makes.get_by_id(request.make_id) is None:
                    raise NotFoundError(CAR_MAKE, request.make_id)

            if await self.uow.car_models.exists_by_name_make_and_year(
                name, request.make_id, request.model_year, exclude_id=model_id
            ):
                raise ConflictError(_duplicate_message(name, request.model_year))

            car_model.make_id = request.make_id
            car_model.name = name
            car_model.model_year = request.model_year
            car_model.updated_at = utc_now()
            await self.uow.car_models.update(car_model)
            logger.info("Updated car model %s", model_id)
            return CarModelResponse.model_validate(car_model)

        return await self.uow.execute_in_transaction(operation)

    async def delete_car_model(self, model_id: uuid.UUID) -> None:
        logger.info("Deleting car model %s", model_id)

        async def operation() -> None:
            if await self.uow.car_models.get_by_id(model_id) is None:
                raise NotFoundError(CAR_MODEL, model_id)
            await self.uow.car_models.delete(model_id)
            logger.info("Deleted car model %s", model_id)

        await self.uow.execute_in_transaction(operation)
