"""
CarLookup Backend: Unit of Work Tests
======================================

Runs against the in-memory SQLite database from conftest.py.

What we test:
    ✅ Successful operations commit and return their result
    ✅ Failed or cancelled operations roll back every staged change
    ✅ Nested calls join the outer transaction
    ✅ Transient database errors are retried; other errors are not
    ✅ close() is idempotent
"""

import asyncio
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from carlookup.database import is_transient_error
from carlookup.models import CarMake
from carlookup.models.car_make import utc_now


def new_make(name: str) -> CarMake:
    return CarMake(make_id=uuid.uuid4(), name=name, country_of_origin="Japan", created_at=utc_now())


async def count_makes(database) -> int:
    async with database.new_session() as session:
        return await session.scalar(select(func.count()).select_from(CarMake))


def transient_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, ConnectionResetError("connection reset"))


class TestExecuteInTransaction:
    @pytest.mark.asyncio
    async def test_commit_on_success(self, database, uow_factory):
        async with uow_factory() as uow:
            async def operation():
                await uow.car_makes.create(new_make("Toyota"))
                return "done"

            assert await uow.execute_in_transaction(operation) == "done"
            assert uow.in_transaction is False

        assert await count_makes(database) == 1

    @pytest.mark.asyncio
    async def test_rollback_on_failure(self, database, uow_factory):
        async with uow_factory() as uow:
            async def operation():
                await uow.car_makes.create(new_make("Honda"))
                await uow.save_changes()
                raise RuntimeError("business rule failed")

            with pytest.raises(RuntimeError, match="business rule failed"):
                await uow.execute_in_transaction(operation)
            assert uow.in_transaction is False

        assert await count_makes(database) == 0

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(self, database, uow_factory):
        async with uow_factory() as uow:
            flushed = asyncio.Event()

            async def operation():
                await uow.car_makes.create(new_make("Subaru"))
                await uow.save_changes()
                flushed.set()
                await asyncio.sleep(3600)

            task = asyncio.create_task(uow.execute_in_transaction(operation))
            await flushed.wait()
            task.cancel()

            with pytest.raises(asyncio.CancelledError):
                await task
            assert uow.in_transaction is False

        assert await count_makes(database) == 0

    @pytest.mark.asyncio
    async def test_nested_call_joins_outer_transaction(self, database, uow_factory):
        async with uow_factory() as uow:
            seen = []

            async def inner():
                seen.append(uow.in_transaction)
                await uow.car_makes.create(new_make("BMW"))

            async def outer():
                await uow.car_makes.create(new_make("Audi"))
                await uow.execute_in_transaction(inner)
                raise RuntimeError("outer failed")

            with pytest.raises(RuntimeError):
                await uow.execute_in_transaction(outer)

        assert seen == [True]
        # The inner write did not commit on its own
        assert await count_makes(database) == 0

    @pytest.mark.asyncio
    async def test_adopts_transaction_started_by_a_read(self, database, uow_factory):
        async with uow_factory() as uow:
            await uow.car_makes.list(1, 10)

            async def operation():
                await uow.car_makes.create(new_make("Ford"))

            await uow.execute_in_transaction(operation)

        assert await count_makes(database) == 1

    @pytest.mark.asyncio
    async def test_save_changes_counts_staged_entities(self, uow_factory):
        async with uow_factory() as uow:
            async def operation():
                await uow.car_makes.create(new_make("Kia"))
                await uow.car_makes.create(new_make("Hyundai"))
                return await uow.save_changes()

            assert await uow.execute_in_transaction(operation) == 2


class TestRetry:
    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, database, uow_factory):
        attempts = []

        async with uow_factory(retry_attempts=3) as uow:
            async def operation():
                attempts.append(1)
                await uow.car_makes.create(new_make(f"Make {len(attempts)}"))
                if len(attempts) == 1:
                    raise transient_error()
                return len(attempts)

            assert await uow.execute_in_transaction(operation) == 2

        assert len(attempts) == 2
        # Only the successful attempt's write survives
        assert await count_makes(database) == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, uow_factory):
        attempts = []

        async with uow_factory(retry_attempts=3) as uow:
            async def operation():
                attempts.append(1)
                raise transient_error()

            with pytest.raises(OperationalError):
                await uow.execute_in_transaction(operation)

        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_non_transient_failure_is_not_retried(self, uow_factory):
        attempts = []

        async with uow_factory(retry_attempts=3) as uow:
            async def operation():
                attempts.append(1)
                raise ValueError("bad input")

            with pytest.raises(ValueError):
                await uow.execute_in_transaction(operation)

        assert len(attempts) == 1


class TestTransientClassification:
    def test_operational_error_is_transient(self):
        assert is_transient_error(transient_error())

    def test_connection_errors_are_transient(self):
        assert is_transient_error(ConnectionResetError())
        assert is_transient_error(asyncio.TimeoutError())

    def test_integrity_error_is_final(self):
        assert not is_transient_error(IntegrityError("INSERT", {}, Exception("duplicate")))

    def test_business_errors_are_final(self):
        assert not is_transient_error(ValueError("nope"))
        assert not is_transient_error(None)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, uow_factory):
        uow = uow_factory()
        await uow.close()
        await uow.close()

    @pytest.mark.asyncio
    async def test_repositories_share_the_session(self, uow_factory):
        async with uow_factory() as uow:
            assert uow.car_makes.session is uow.session
            assert uow.car_models.session is uow.session
            assert uow.users.session is uow.session
