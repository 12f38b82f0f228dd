"""
CarLookup Backend: ORM Models
==============================

Importing this package registers every table on `Base.metadata`
(Alembic autogenerate and `Database.create_schema()` depend on that).
"""

from carlookup.models.car_make import CarMake
from carlookup.models.car_model import CarModel
from carlookup.models.role import Role
from carlookup.models.user import User, UserRole

__all__ = ["CarMake", "CarModel", "Role", "User", "UserRole"]
