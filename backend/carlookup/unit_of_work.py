"""
CarLookup Backend: Unit of Work
================================

What:  Owns one AsyncSession for the lifetime of a request and runs write
       operations inside a retry-aware transaction.
Why:   Managers need "all of this or none of it" semantics across several
       repository calls, plus protection against dropped connections.
How:   Repositories are built eagerly around the session in __init__.
       `execute_in_transaction()` wraps begin → operation → flush → commit in
       a tenacity AsyncRetrying loop that only retries transient failures.
Who:   Created per-request by the `get_unit_of_work` dependency.
When:  Reads use the session directly; writes go through execute_in_transaction.

Transaction Flow:
    ┌───────┐   ┌───────────┐   ┌───────┐   ┌────────┐
    │ begin │──▶│ operation │──▶│ flush │──▶│ commit │──▶ result
    └───────┘   └───────────┘   └───────┘   └────────┘
         │            │              │           │
         └────────────┴──────┬───────┴───────────┘
                             ▼
                   rollback, re-raise original
                             │
             transient? ──yes──▶ back off, replay whole attempt
                  │
                  no ──▶ propagate to the mapping chain

    A nested call (operation calling execute_in_transaction again on the same
    unit of work) runs the inner operation directly inside the outer
    transaction; only the outermost call commits.
"""

import logging
from types import TracebackType
from typing import Awaitable, Callable, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from carlookup.config import Settings
from carlookup.database import Database, is_transient_error
from carlookup.repositories import (
    CarMakeRepository,
    CarModelRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWork:
    """
    Session owner and transaction boundary for one request.

    Args:
        session_factory: Produces the AsyncSession this unit of work owns.
        retry_attempts:  Total attempts for a transactional operation (>= 1).
        retry_min_wait:  Initial backoff in seconds.
        retry_max_wait:  Backoff ceiling in seconds.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        retry_attempts: int = 3,
        retry_min_wait: float = 0.2,
        retry_max_wait: float = 5.0,
    ):
        self._session: AsyncSession = session_factory()
        self._car_makes = CarMakeRepository(self._session)
        self._car_models = CarModelRepository(self._session)
        self._users = UserRepository(self._session)

        self._retry_attempts = max(1, retry_attempts)
        self._retry_min_wait = retry_min_wait
        self._retry_max_wait = retry_max_wait

        self._in_transaction = False
        self._closed = False

    @classmethod
    def from_settings(cls, database: Database, settings: Settings) -> "UnitOfWork":
        return cls(
            database.session_factory,
            retry_attempts=settings.db_retry_max_attempts,
            retry_min_wait=settings.db_retry_min_wait,
            retry_max_wait=settings.db_retry_max_wait,
        )

    # ── Repositories ──────────────────────────────────────────────────────
    @property
    def car_makes(self) -> CarMakeRepository:
        return self._car_makes

    @property
    def car_models(self) -> CarModelRepository:
        return self._car_models

    @property
    def users(self) -> UserRepository:
        return self._users

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    # ── Transactions ──────────────────────────────────────────────────────
    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run `operation` atomically and return its result.

        Raises:
            Whatever `operation` (or flush/commit) raised, unmodified, after
            rolling back. Transient database failures are retried first.
        """
        if self._in_transaction:
            return await operation()

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential_jitter(
                initial=self._retry_min_wait,
                max=self._retry_max_wait,
                jitter=self._retry_min_wait,
            ),
            retry=retry_if_exception(is_transient_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                result = await self._run_attempt(operation)
        return result

    async def _run_attempt(self, operation: Callable[[], Awaitable[T]]) -> T:
        session = self._session
        self._in_transaction = True
        try:
            # A prior read may have autobegun a transaction; adopt it
            if not session.in_transaction():
                await session.begin()
            result = await operation()
            await self.save_changes()
            await session.commit()
            return result
        except BaseException as exc:
            await self._rollback_after(exc)
            raise
        finally:
            self._in_transaction = False

    async def _rollback_after(self, exc: BaseException) -> None:
        try:
            await self._session.rollback()
        except Exception:
            logger.error(
                "Rollback failed after %s; original error is re-raised",
                type(exc).__name__,
                exc_info=True,
            )

    async def save_changes(self) -> int:
        """Flush staged writes; returns how many entities were new, dirty or deleted."""
        session = self._session
        staged = len(session.new) + len(session.dirty) + len(session.deleted)
        try:
            await session.flush()
        except Exception as exc:
            logger.warning("Flushing %d staged change(s) failed: %s", staged, exc)
            raise
        logger.debug("Flushed %d staged change(s)", staged)
        return staged

    # ── Lifecycle ─────────────────────────────────────────────────────────
    async def close(self) -> None:
        """Release the session. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._session.close()

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()
