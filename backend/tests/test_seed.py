"""
CarLookup Backend: Seed Data Tests
===================================

What we test:
    ✅ Seeding creates roles, demo accounts and the starter catalogue
    ✅ Demo accounts can log in with their documented passwords
    ✅ Running the seeder twice changes nothing
"""

import uuid

import pytest
from sqlalchemy import func, select

from carlookup.models import CarMake, CarModel, Role, User
from carlookup.repositories import UserRepository
from carlookup.seed import MAKE_DEFINITIONS, MODELS_BY_MAKE, seed_database


async def count(database, model) -> int:
    async with database.new_session() as session:
        return await session.scalar(select(func.count()).select_from(model))


class TestSeedDatabase:
    @pytest.mark.asyncio
    async def test_seeds_everything(self, database, password_service):
        await seed_database(database, password_service)

        assert await count(database, Role) == 3
        assert await count(database, User) == 3
        assert await count(database, CarMake) == len(MAKE_DEFINITIONS)
        assert await count(database, CarModel) == sum(len(m) for m in MODELS_BY_MAKE.values())

    @pytest.mark.asyncio
    async def test_fixed_make_ids(self, database, password_service):
        await seed_database(database, password_service)

        async with database.new_session() as session:
            toyota = await session.get(CarMake, uuid.UUID("f47ac10b-58cc-4372-a567-0e02b2c3d479"))
        assert toyota.name == "Toyota"

    @pytest.mark.asyncio
    async def test_demo_accounts_verify(self, database, password_service):
        await seed_database(database, password_service)

        async with database.new_session() as session:
            admin = await UserRepository(session).get_by_username("admin")

        assert admin.role_names == ["admin"]
        assert password_service.verify_password("admin123", admin.salt, admin.password_hash)

    @pytest.mark.asyncio
    async def test_idempotent(self, database, password_service):
        await seed_database(database, password_service)
        await seed_database(database, password_service)

        assert await count(database, Role) == 3
        assert await count(database, CarMake) == len(MAKE_DEFINITIONS)
