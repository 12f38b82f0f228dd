# Repositories package init
"""
CarLookup Backend: Repositories
================================

Thin async query objects bound to one AsyncSession. They return entities or
None and never raise domain errors; deciding what "missing" means is the
managers' job.

    - CarMakeRepository:  list/get/exists_by_name/create/update/delete
    - CarModelRepository: list_by_make/get/exists_by_name_make_and_year/
                          has_models_for_make/create/update/delete
    - UserRepository:     get_by_username (active users, roles loaded)
"""

from carlookup.repositories.car_make_repository import CarMakeRepository
from carlookup.repositories.car_model_repository import CarModelRepository
from carlookup.repositories.user_repository import UserRepository

__all__ = ["CarMakeRepository", "CarModelRepository", "UserRepository"]
