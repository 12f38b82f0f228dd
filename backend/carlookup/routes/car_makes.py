"""
CarLookup Backend: Car Make Routes
===================================

What:  /api/v1/carmakes endpoints.
How:   Thin adapters: collect parameters, call CarMakeManager, wrap the result
       in the response envelope. Role checks run as route dependencies,
       before the unit of work is created.

Route Inventory:
    GET    /api/v1/carmakes                       reader+
    GET    /api/v1/carmakes/{id}                  reader+
    GET    /api/v1/carmakes/{id}/carmodels        reader+
    POST   /api/v1/carmakes                       editor+  (201 + Location)
    PUT    /api/v1/carmakes/{id}                  editor+
    DELETE /api/v1/carmakes/{id}                  admin
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from carlookup.dependencies import get_car_make_manager
from carlookup.managers import CarMakeManager
from carlookup.schemas.car import CarMakeRequest, CarMakeResponse, CarModelResponse
from carlookup.schemas.envelope import ApiResponse, PagedResponse, ok
from carlookup.schemas.pagination import CarModelPaginationQuery, PaginationQuery
from carlookup.security import require_admin, require_editor, require_reader

router = APIRouter(prefix="/api/v1/carmakes", tags=["Car Makes"])


@router.get(
    "",
    response_model=PagedResponse[CarMakeResponse],
    dependencies=[Depends(require_reader)],
    summary="List car makes",
)
async def list_car_makes(
    page: int = Query(default=1, description="1-based page number"),
    limit: int = Query(default=0, description="Page size; 0 uses the default"),
    name_contains: Optional[str] = Query(
        default=None, alias="nameContains", description="Case-insensitive name filter"
    ),
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> PagedResponse[CarMakeResponse]:
    query = PaginationQuery(page=page, limit=limit, name_contains=name_contains)
    return await manager.list_car_makes(query)


@router.get(
    "/{make_id}",
    response_model=ApiResponse[CarMakeResponse],
    dependencies=[Depends(require_reader)],
    summary="Get a car make",
)
async def get_car_make(
    make_id: uuid.UUID,
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> ApiResponse[CarMakeResponse]:
    result = await manager.get_car_make(make_id)
    return ok(result, "Car make retrieved successfully")


@router.get(
    "/{make_id}/carmodels",
    response_model=PagedResponse[CarModelResponse],
    dependencies=[Depends(require_reader)],
    summary="List the car models of a make",
)
async def list_car_models_for_make(
    make_id: uuid.UUID,
    page: int = Query(default=1),
    limit: int = Query(default=0),
    name_contains: Optional[str] = Query(default=None, alias="nameContains"),
    year: Optional[int] = Query(default=None, description="Exact model year"),
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> PagedResponse[CarModelResponse]:
    query = CarModelPaginationQuery(
        page=page, limit=limit, name_contains=name_contains, year=year
    )
    return await manager.list_car_models(make_id, query)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CarMakeResponse],
    dependencies=[Depends(require_editor)],
    summary="Create a car make",
)
async def create_car_make(
    request: CarMakeRequest,
    response: Response,
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> ApiResponse[CarMakeResponse]:
    result = await manager.create_car_make(request)
    response.headers["Location"] = f"{router.prefix}/{result.make_id}"
    return ok(result, "Car make created successfully")


@router.put(
    "/{make_id}",
    response_model=ApiResponse[CarMakeResponse],
    dependencies=[Depends(require_editor)],
    summary="Update a car make",
)
async def update_car_make(
    make_id: uuid.UUID,
    request: CarMakeRequest,
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> ApiResponse[CarMakeResponse]:
    result = await manager.update_car_make(make_id, request)
    return ok(result, "Car make updated successfully")


@router.delete(
    "/{make_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Delete a car make without models",
)
async def delete_car_make(
    make_id: uuid.UUID,
    manager: CarMakeManager = Depends(get_car_make_manager),
) -> ApiResponse[None]:
    await manager.delete_car_make(make_id)
    return ok(None, "Car make deleted successfully")
