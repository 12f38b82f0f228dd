"""
CarLookup Backend: Database Engine & Session Management
========================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       transient-failure classifier used by the unit of work's retry policy.
Why:   Centralizes all database connection logic in one place.
How:   `Database` bundles an engine with its session factory. One instance is
       created by the application lifespan and stored on `app.state`.
Who:   The unit of work dependency, the health check, the seeder and tests.
When:  Engine is created at startup; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite (tests, local experiments) uses SQLAlchemy's default pool, which
    does not accept sizing arguments.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from carlookup.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic reads for
    autogenerate and `Database.create_schema()` uses for create_all.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured URL.

    Pool sizing only applies to server databases; SQLite URLs get the
    dialect's default pool.
    """
    url = make_url(settings.database_url)
    kwargs: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
    }

    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
        if url.get_driver_name() == "asyncpg":
            kwargs["connect_args"] = {"command_timeout": settings.db_command_timeout}

    return create_async_engine(url, **kwargs)


class Database:
    """
    Owns the engine and the session factory for one running application.

    expire_on_commit=False: attributes stay readable after commit, which the
    managers rely on when projecting entities into response DTOs.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(settings))

    def new_session(self) -> AsyncSession:
        return self.session_factory()

    async def create_schema(self) -> None:
        """Create every mapped table that does not exist yet."""
        # Registers all models on Base.metadata
        import carlookup.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> None:
        """Run SELECT 1; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Transient Failure Classification ──────────────────────────────────────
def is_transient_error(exc: Optional[BaseException]) -> bool:
    """
    Decide whether a failed transactional attempt is worth replaying.

    Transient: dropped/invalidated connections, driver-level operational and
    interface errors, socket failures and timeouts. Everything else
    (integrity violations, programming errors, business exceptions) is final.
    """
    if exc is None:
        return False
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return isinstance(exc, (ConnectionError, asyncio.TimeoutError))
