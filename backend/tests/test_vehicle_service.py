"""
Vehicle Registry Backend — Vehicle Service Unit Tests
=======================================================

What:  Tests for the record store (add, count, clear).
How:   Real sessions on the in-memory engine for the happy paths; a mock
       session for database failures.

What we test:
    ✅ add stores the record verbatim and assigns a surrogate key
    ✅ no uniqueness or value checks
    ✅ clear empties the store
    ✅ concurrent adds are all kept
    ✅ SQLAlchemy failures surface as DatabaseError
    ✅ the singleton lock survives a new event loop
"""

import asyncio

import pytest

from vehicle_api.database import async_session_factory
from vehicle_api.exceptions import DatabaseError
from vehicle_api.schemas.vehicle import VehicleCreate
from vehicle_api.services.vehicle_service import VehicleService


def make_vehicle(vehicle_id: int = 1, **overrides) -> VehicleCreate:
    data = {"id": vehicle_id, "modelo": "Fusca", "placa": "AAA1234", "ano": 1985}
    data.update(overrides)
    return VehicleCreate.model_validate(data)


class TestVehicleServiceAdd:

    def setup_method(self):
        self.service = VehicleService()

    @pytest.mark.asyncio
    async def test_add_stores_fields(self, db_session):
        vehicle = await self.service.add(db_session, make_vehicle(42))

        assert vehicle.row_id is not None
        assert vehicle.vehicle_id == 42
        assert vehicle.model == "Fusca"
        assert vehicle.plate == "AAA1234"
        assert vehicle.year == 1985
        assert await self.service.count(db_session) == 1

    @pytest.mark.asyncio
    async def test_duplicate_ids_get_distinct_rows(self, db_session):
        first = await self.service.add(db_session, make_vehicle(1))
        second = await self.service.add(db_session, make_vehicle(1, modelo="Brasilia"))

        assert first.row_id != second.row_id
        assert await self.service.count(db_session) == 2

    @pytest.mark.asyncio
    async def test_values_are_not_validated(self, db_session):
        vehicle = await self.service.add(
            db_session, make_vehicle(-1, modelo="", placa="??", ano=-300)
        )

        assert vehicle.vehicle_id == -1
        assert vehicle.year == -300

    @pytest.mark.asyncio
    async def test_add_failure_raises_database_error(self, mock_db_session):
        mock_db_session.commit.side_effect = RuntimeError("disk on fire")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.add(mock_db_session, make_vehicle())
        assert exc_info.value.context["operation"] == "add"
        assert exc_info.value.context["original_error"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_concurrent_adds_are_all_kept(self, db_session):
        async def add_one(i: int) -> None:
            async with async_session_factory() as session:
                await self.service.add(session, make_vehicle(i))
                await session.commit()

        await asyncio.gather(*(add_one(i) for i in range(10)))

        assert await self.service.count(db_session) == 10


class TestVehicleServiceCountAndClear:

    def setup_method(self):
        self.service = VehicleService()

    @pytest.mark.asyncio
    async def test_count_empty_store(self, db_session):
        assert await self.service.count(db_session) == 0

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, db_session):
        for i in range(3):
            await self.service.add(db_session, make_vehicle(i))

        removed = await self.service.clear(db_session)

        assert removed == 3
        assert await self.service.count(db_session) == 0

    @pytest.mark.asyncio
    async def test_count_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("gone")

        with pytest.raises(DatabaseError):
            await self.service.count(mock_db_session)


class TestVehicleServiceAcrossEventLoops:
    """The module singleton outlives any one event loop (tests, server restarts)."""

    def test_singleton_lock_works_on_a_second_loop(self):
        from unittest.mock import AsyncMock, MagicMock

        from vehicle_api.services.vehicle_service import vehicle_service

        async def slow_execute(*args, **kwargs):
            await asyncio.sleep(0)
            result = MagicMock()
            result.scalar.return_value = 3
            return result

        async def contend() -> list:
            session = AsyncMock()
            session.execute = AsyncMock(side_effect=slow_execute)
            return await asyncio.gather(*(vehicle_service.count(session) for _ in range(5)))

        assert asyncio.run(contend()) == [3] * 5
        assert asyncio.run(contend()) == [3] * 5
