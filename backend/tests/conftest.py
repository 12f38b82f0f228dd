"""
CarLookup Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, services, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── settings:        Settings with test-safe values (no .env needed)
    ├── database:        In-memory SQLite with the full schema
    │   ├── uow_factory:     Builds UnitOfWork instances with zero backoff
    │   ├── seeded_users:    Roles plus admin/editor/reader/inactive accounts
    │   └── make_factory:    Inserts a CarMake (and optional models) directly
    ├── password_service / token_service
    ├── app:             create_app(settings) wired to the test database
    ├── client:          HTTPX AsyncClient over ASGITransport
    └── auth_headers:    Builds an Authorization header for a set of roles

The in-memory SQLite database lives on one connection (StaticPool) so every
session in a test sees the same data.
"""

import os
import uuid
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
# carlookup.main builds a module-level app from the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"

from carlookup.config import Settings  # noqa: E402
from carlookup.database import Database  # noqa: E402
from carlookup.models import CarMake, CarModel, Role, User, UserRole  # noqa: E402
from carlookup.models.car_make import utc_now  # noqa: E402
from carlookup.services.password_service import PasswordService  # noqa: E402
from carlookup.services.token_service import TokenService  # noqa: E402
from carlookup.unit_of_work import UnitOfWork  # noqa: E402

TEST_JWT_KEY = "carlookup-test-signing-key-0123456789abcdef"

TEST_USERS: List[Tuple[str, str, List[str], bool]] = [
    ("admin", "admin123", ["admin"], True),
    ("editor", "editor123", ["editor"], True),
    ("reader", "reader123", ["reader"], True),
    ("retired", "retired123", ["reader"], False),
]


# ══════════════════════════════════════════════════════════════════════════
# Configuration & Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        jwt_key=TEST_JWT_KEY,
        jwt_issuer="CarLookup.Api",
        jwt_audience="CarLookup.Clients",
        jwt_expiration_minutes=60,
        default_page_size=20,
        max_page_size=100,
        db_retry_max_attempts=3,
        db_retry_min_wait=0,
        db_retry_max_wait=0.1,
        log_level="WARNING",
        debug=False,
    )


@pytest.fixture
def password_service() -> PasswordService:
    return PasswordService()


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService.from_settings(settings)


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """
    Fresh in-memory database with every table created.

    Foreign keys are switched on so RESTRICT/CASCADE behave as on PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    db = Database(engine)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database) -> Callable[..., UnitOfWork]:
    """Builds units of work on the test database; backoff is zero by default."""

    def _build(retry_attempts: int = 3) -> UnitOfWork:
        return UnitOfWork(
            database.session_factory,
            retry_attempts=retry_attempts,
            retry_min_wait=0,
            retry_max_wait=0,
        )

    return _build


@pytest_asyncio.fixture
async def seeded_users(database, password_service) -> Dict[str, User]:
    """Roles admin/editor/reader plus one account per role and an inactive reader."""
    now = utc_now()
    users: Dict[str, User] = {}
    async with database.new_session() as session:
        async with session.begin():
            roles = {
                name: Role(role_id=uuid.uuid4(), name=name, created_at=now)
                for name in ("admin", "editor", "reader")
            }
            session.add_all(roles.values())
            for username, password, role_names, active in TEST_USERS:
                salt = password_service.generate_salt()
                user = User(
                    user_id=uuid.uuid4(),
                    username=username,
                    email=f"{username}@carlookup.test",
                    salt=salt,
                    password_hash=password_service.hash_password(password, salt),
                    is_active=active,
                    created_at=now,
                    user_roles=[UserRole(role=roles[r], assigned_at=now) for r in role_names],
                )
                session.add(user)
                users[username] = user
    return users


MakeFactory = Callable[..., Awaitable[CarMake]]


@pytest_asyncio.fixture
async def make_factory(database) -> MakeFactory:
    """
    Insert a make directly, bypassing the managers.

    Usage:
        toyota = await make_factory("Toyota", models=[("Camry", 2023)])
    """

    async def _create(
        name: str,
        country: str = "Japan",
        models: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> CarMake:
        now = utc_now()
        car_make = CarMake(make_id=uuid.uuid4(), name=name, country_of_origin=country, created_at=now)
        async with database.new_session() as session:
            async with session.begin():
                session.add(car_make)
                await session.flush()
                for model_name, year in models or ():
                    session.add(CarModel(
                        model_id=uuid.uuid4(),
                        make_id=car_make.make_id,
                        name=model_name,
                        model_year=year,
                        created_at=now,
                    ))
        return car_make

    return _create


# ══════════════════════════════════════════════════════════════════════════
# Application & HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def app(settings, database):
    """create_app() around the test settings, with the engine swapped for the test one."""
    from carlookup.main import create_app

    application = create_app(settings)
    await application.state.database.dispose()
    application.state.database = database
    yield application


@pytest_asyncio.fixture
async def client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def auth_headers(app) -> Callable[..., Dict[str, str]]:
    """Bearer header for a caller holding exactly the given roles."""

    def _headers(*roles: str, username: str = "tester") -> Dict[str, str]:
        token = app.state.token_service.generate_token(username, list(roles))
        return {"Authorization": f"Bearer {token}"}

    return _headers
