"""
CarLookup Backend: Development Seed Data
=========================================

What:  Roles, three demo accounts and a starter catalogue of makes and models.
When:  On startup when SEED_ON_STARTUP=true, or from the command line:
           python -m carlookup.seed
How:   Each group is inserted only if its table is empty, so running the
       seeder repeatedly is harmless.

Demo accounts (development only):
    admin  / admin123   → admin
    editor / editor123  → editor
    reader / reader123  → reader

Make ids are fixed so links and tests can refer to them across databases.
"""

import asyncio
import logging
import uuid
from typing import Dict, List, Tuple

from sqlalchemy import func, select

from carlookup.config import get_settings
from carlookup.database import Database
from carlookup.models import CarMake, CarModel, Role, User, UserRole
from carlookup.models.car_make import utc_now
from carlookup.services.password_service import PasswordService

logger = logging.getLogger(__name__)

ROLE_DEFINITIONS: List[Tuple[str, str]] = [
    ("admin", "Full access, including deletes"),
    ("editor", "Create and update car makes and car models"),
    ("reader", "Read-only access to the catalogue"),
]

USER_DEFINITIONS: List[Tuple[str, str, str, List[str]]] = [
    ("admin", "admin123", "admin@carlookup.local", ["admin"]),
    ("editor", "editor123", "editor@carlookup.local", ["editor"]),
    ("reader", "reader123", "reader@carlookup.local", ["reader"]),
]

MAKE_DEFINITIONS: List[Tuple[str, str, str]] = [
    ("f47ac10b-58cc-4372-a567-0e02b2c3d479", "Toyota", "Japan"),
    ("f47ac10b-58cc-4372-a567-0e02b2c3d480", "Honda", "Japan"),
    ("f47ac10b-58cc-4372-a567-0e02b2c3d481", "Ford", "United States"),
    ("f47ac10b-58cc-4372-a567-0e02b2c3d482", "BMW", "Germany"),
    ("f47ac10b-58cc-4372-a567-0e02b2c3d483", "Mercedes-Benz", "Germany"),
    ("a47ac10b-58cc-4372-a567-0e02b2c3d484", "Volkswagen", "Germany"),
    ("b47ac10b-58cc-4372-a567-0e02b2c3d485", "Chevrolet", "United States"),
    ("c47ac10b-58cc-4372-a567-0e02b2c3d486", "Nissan", "Japan"),
    ("d47ac10b-58cc-4372-a567-0e02b2c3d487", "Hyundai", "South Korea"),
    ("e47ac10b-58cc-4372-a567-0e02b2c3d488", "Kia", "South Korea"),
    ("f57ac10b-58cc-4372-a567-0e02b2c3d489", "Audi", "Germany"),
    ("067ac10b-58cc-4372-a567-0e02b2c3d48a", "Peugeot", "France"),
    ("177ac10b-58cc-4372-a567-0e02b2c3d48b", "Renault", "France"),
    ("287ac10b-58cc-4372-a567-0e02b2c3d48c", "Fiat", "Italy"),
    ("397ac10b-58cc-4372-a567-0e02b2c3d48d", "Subaru", "Japan"),
    ("4a7ac10b-58cc-4372-a567-0e02b2c3d48e", "Mazda", "Japan"),
    ("5b7ac10b-58cc-4372-a567-0e02b2c3d48f", "Tesla", "United States"),
    ("6c7ac10b-58cc-4372-a567-0e02b2c3d490", "Volvo", "Sweden"),
    ("7d7ac10b-58cc-4372-a567-0e02b2c3d491", "Mitsubishi", "Japan"),
    ("8e7ac10b-58cc-4372-a567-0e02b2c3d492", "Land Rover", "United Kingdom"),
    ("9f7ac10b-58cc-4372-a567-0e02b2c3d493", "Jaguar", "United Kingdom"),
    ("a07ac10b-58cc-4372-a567-0e02b2c3d494", "Porsche", "Germany"),
    ("b17ac10b-58cc-4372-a567-0e02b2c3d495", "Lexus", "Japan"),
    ("c27ac10b-58cc-4372-a567-0e02b2c3d496", "Acura", "Japan"),
    ("d37ac10b-58cc-4372-a567-0e02b2c3d497", "Infiniti", "Japan"),
]

MODELS_BY_MAKE: Dict[str, List[Tuple[str, int]]] = {
    "Toyota": [
        ("Camry", 2023), ("Corolla", 2023), ("Prius", 2023), ("RAV4", 2022),
        ("Highlander", 2023), ("Tacoma", 2023), ("Supra", 2023), ("Land Cruiser", 2021),
    ],
    "Honda": [
        ("Civic", 2023), ("Accord", 2023), ("CR-V", 2022), ("Pilot", 2023),
        ("Odyssey", 2022), ("S2000", 2009), ("NSX", 2022),
    ],
    "Ford": [
        ("F-150", 2023), ("Mustang", 2023), ("Explorer", 2022), ("Bronco", 2023),
        ("Ranger", 2023), ("Mustang Mach-E", 2023), ("Focus", 2018),
    ],
    "BMW": [
        ("3 Series", 2023), ("5 Series", 2023), ("X3", 2022), ("X5", 2022),
        ("i4", 2023), ("M3", 2023), ("Z4", 2023),
    ],
    "Mercedes-Benz": [
        ("C-Class", 2023), ("E-Class", 2023), ("S-Class", 2022), ("GLC", 2023), ("EQS", 2023),
    ],
    "Volkswagen": [
        ("Golf", 2023), ("Passat", 2022), ("Tiguan", 2023), ("ID.4", 2023), ("Beetle", 2019),
    ],
    "Chevrolet": [
        ("Silverado", 2023), ("Camaro", 2023), ("Corvette", 2023), ("Bolt EV", 2023),
    ],
    "Tesla": [
        ("Model S", 2023), ("Model 3", 2023), ("Model X", 2023), ("Model Y", 2023),
    ],
}


async def _is_empty(session, model) -> bool:
    count = await session.scalar(select(func.count()).select_from(model))
    return not count


async def seed_database(database: Database, passwords: PasswordService) -> None:
    """Insert any missing seed groups in one transaction."""
    now = utc_now()
    async with database.new_session() as session:
        async with session.begin():
            roles: Dict[str, Role] = {}
            if await _is_empty(session, Role):
                for name, description in ROLE_DEFINITIONS:
                    roles[name] = Role(role_id=uuid.uuid4(), name=name,
                                       description=description, created_at=now)
                    session.add(roles[name])
                logger.info("Seeded %d roles", len(roles))
            else:
                result = await session.scalars(select(Role))
                roles = {role.name: role for role in result}

            if await _is_empty(session, User):
                for username, password, email, role_names in USER_DEFINITIONS:
                    salt = passwords.generate_salt()
                    user = User(
                        user_id=uuid.uuid4(),
                        username=username,
                        email=email,
                        salt=salt,
                        password_hash=passwords.hash_password(password, salt),
                        is_active=True,
                        created_at=now,
                        user_roles=[
                            UserRole(role=roles[name], assigned_at=now)
                            for name in role_names if name in roles
                        ],
                    )
                    session.add(user)
                logger.info("Seeded %d users", len(USER_DEFINITIONS))

            if await _is_empty(session, CarMake):
                make_ids: Dict[str, uuid.UUID] = {}
                for make_id, name, country in MAKE_DEFINITIONS:
                    make_ids[name] = uuid.UUID(make_id)
                    session.add(CarMake(make_id=make_ids[name], name=name,
                                        country_of_origin=country, created_at=now))
                # Makes must exist before models reference them
                await session.flush()

                model_count = 0
                for make_name, models in MODELS_BY_MAKE.items():
                    for model_name, year in models:
                        session.add(CarModel(
                            model_id=uuid.uuid4(),
                            make_id=make_ids[make_name],
                            name=model_name,
                            model_year=year,
                            created_at=now,
                        ))
                        model_count += 1
                logger.info("Seeded %d car makes and %d car models",
                            len(MAKE_DEFINITIONS), model_count)


async def _main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    settings = get_settings()
    database = Database.from_settings(settings)
    try:
        await database.create_schema()
        await seed_database(database, PasswordService())
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
