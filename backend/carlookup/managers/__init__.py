# Managers package init
"""
CarLookup Backend: Managers
============================

Business orchestration between routes and the unit of work. One manager per
aggregate, plus authentication:

    - CarMakeManager:  makes CRUD, models-of-a-make listing
    - CarModelManager: models CRUD
    - AuthManager:     credential check and token issue
"""

from carlookup.managers.auth_manager import AuthManager
from carlookup.managers.car_make_manager import CarMakeManager
from carlookup.managers.car_model_manager import CarModelManager

__all__ = ["AuthManager", "CarMakeManager", "CarModelManager"]
