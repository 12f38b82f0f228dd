"""
CarLookup Backend: FastAPI Dependencies
========================================

What:  Builds the per-request object graph: unit of work → managers.
Why:   Routes stay thin and tests can override any piece with
       `app.dependency_overrides`.
How:   Long-lived, immutable collaborators (settings, database, services)
       are created once by `create_app()` and stored on `app.state`.
       Per-request ones (unit of work, managers) are built here.
"""

from typing import AsyncIterator

from fastapi import Depends, Request

from carlookup.config import Settings
from carlookup.database import Database
from carlookup.managers import AuthManager, CarMakeManager, CarModelManager
from carlookup.services.pagination_service import PaginationService
from carlookup.services.password_service import PasswordService
from carlookup.services.token_service import TokenService
from carlookup.unit_of_work import UnitOfWork


# ── Application-scoped ────────────────────────────────────────────────────
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_pagination_service(request: Request) -> PaginationService:
    return request.app.state.pagination_service


def get_password_service(request: Request) -> PasswordService:
    return request.app.state.password_service


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# ── Request-scoped ────────────────────────────────────────────────────────
async def get_unit_of_work(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> AsyncIterator[UnitOfWork]:
    """
    One unit of work per request, closed on every exit path.

    Exceptions from the route propagate through the `yield` untouched; the
    error boundary renders them after the session has been released.
    """
    uow = UnitOfWork.from_settings(database, settings)
    try:
        yield uow
    finally:
        await uow.close()


def get_car_make_manager(
    uow: UnitOfWork = Depends(get_unit_of_work),
    pagination: PaginationService = Depends(get_pagination_service),
    settings: Settings = Depends(get_app_settings),
) -> CarMakeManager:
    return CarMakeManager(
        uow,
        pagination,
        max_name_filter_length=settings.max_name_filter_length,
    )


def get_car_model_manager(uow: UnitOfWork = Depends(get_unit_of_work)) -> CarModelManager:
    return CarModelManager(uow)


def get_auth_manager(
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
    tokens: TokenService = Depends(get_token_service),
) -> AuthManager:
    return AuthManager(uow, passwords, tokens)
