"""
CarLookup Backend: Car Model Routes
====================================

Route Inventory:
    GET    /api/v1/carmodels/{id}    reader+
    POST   /api/v1/carmodels         editor+  (201 + Location)
    PUT    /api/v1/carmodels/{id}    editor+
    DELETE /api/v1/carmodels/{id}    admin

Listing lives under /api/v1/carmakes/{id}/carmodels.
"""

import uuid

from fastapi import APIRouter, Depends, Response, status

from carlookup.dependencies import get_car_model_manager
from carlookup.managers import CarModelManager
from carlookup.schemas.car import CarModelRequest, CarModelResponse
from carlookup.schemas.envelope import ApiResponse, ok
from carlookup.security import require_admin, require_editor, require_reader

router = APIRouter(prefix="/api/v1/carmodels", tags=["Car Models"])


@router.get(
    "/{model_id}",
    response_model=ApiResponse[CarModelResponse],
    dependencies=[Depends(require_reader)],
)
async def get_car_model(
    model_id: uuid.UUID,
    manager: CarModelManager = Depends(get_car_model_manager),
) -> ApiResponse[CarModelResponse]:
    result = await manager.get_car_model(model_id)
    return ok(result, "Car model retrieved successfully")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CarModelResponse],
    dependencies=[Depends(require_editor)],
)
async def create_car_model(
    request: CarModelRequest,
    response: Response,
    manager: CarModelManager = Depends(get_car_model_manager),
) -> ApiResponse[CarModelResponse]:
    result = await manager.create_car_model(request)
    response.headers["Location"] = f"{router.prefix}/{result.model_id}"
    return ok(result, "Car model created successfully")


@router.put(
    "/{model_id}",
    response_model=ApiResponse[CarModelResponse],
    dependencies=[Depends(require_editor)],
)
async def update_car_model(
    model_id: uuid.UUID,
    request: CarModelRequest,
    manager: CarModelManager = Depends(get_car_model_manager),
) -> ApiResponse[CarModelResponse]:
    result = await manager.update_car_model(model_id, request)
    return ok(result, "Car model updated successfully")


@router.delete(
    "/{model_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
)
async def delete_car_model(
    model_id: uuid.UUID,
    manager: CarModelManager = Depends(get_car_model_manager),
) -> ApiResponse[None]:
    await manager.delete_car_model(model_id)
    return ok(None, "Car model deleted successfully")
