"""
Vehicle Registry Backend — Vehicle Service (Record Store)
===========================================================

What:  The in-memory record store for registered vehicles.
How:   Thin layer over an AsyncSession bound to the in-memory engine.
Who:   Called by the admin route (add) and the health route (count);
       tests use clear() to reset state between cases.

Contract:
    add(record)  → always succeeds for a well-typed record; no uniqueness,
                   no format or range checks, no capacity limit.
    count()      → number of records currently held.
    clear()      → drop every record (maintenance/tests only, no route).

Concurrency:
    All sessions share the one in-memory connection. Each operation runs
    and ends its transaction (commit, or rollback on failure) while holding
    the service's LoopLocalLock, so exactly one session touches the store
    at a time and no session's cleanup can undo another's write. The
    lock is rebuilt per event loop, so the module singleton survives a
    restarted loop.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_api.database import LoopLocalLock
from vehicle_api.exceptions import DatabaseError
from vehicle_api.models.vehicle import Vehicle
from vehicle_api.schemas.vehicle import VehicleCreate

logger = logging.getLogger(__name__)


class VehicleService:
    """
    Business logic layer for vehicle records.

    Error Handling Strategy:
        SQLAlchemy failures are rolled back and wrapped in DatabaseError so
        the global handler answers with a generic 500 and the details stay
        in the logs.
    """

    def __init__(self) -> None:
        self._lock = LoopLocalLock()

    async def add(self, db: AsyncSession, data: VehicleCreate) -> Vehicle:
        """
        Append one vehicle record to the store and commit it.

        Args:
            db: Async database session (injected by FastAPI)
            data: Decoded request body

        Returns:
            The stored Vehicle row (row_id assigned).

        Raises:
            DatabaseError: The insert failed.
        """
        vehicle = Vehicle(
            vehicle_id=data.id,
            model=data.model,
            plate=data.plate,
            year=data.year,
        )
        async with self._lock:
            try:
                db.add(vehicle)
                await db.commit()
            except Exception as e:
                await db.rollback()
                logger.error("Failed to store vehicle id=%s: %s", data.id, str(e), exc_info=True)
                raise DatabaseError(
                    message="Could not register the vehicle. Please try again.",
                    context={"operation": "add", "original_error": type(e).__name__},
                )

        logger.info(
            "Vehicle registered: id=%s model=%s plate=%s year=%s",
            vehicle.vehicle_id,
            vehicle.model,
            vehicle.plate,
            vehicle.year,
        )
        return vehicle

    async def count(self, db: AsyncSession) -> int:
        """Number of records currently held."""
        async with self._lock:
            try:
                result = await db.execute(select(func.count(Vehicle.row_id)))
                total = result.scalar() or 0
                await db.commit()
                return total
            except Exception as e:
                await db.rollback()
                logger.error("Failed to count vehicles: %s", str(e))
                raise DatabaseError(
                    message="Could not read the vehicle store.",
                    context={"operation": "count", "original_error": type(e).__name__},
                )

    async def clear(self, db: AsyncSession) -> int:
        """
        Remove every record and return how many were removed.

        Not exposed over HTTP. Leaves the store as empty as a process
        restart would.
        """
        async with self._lock:
            try:
                result = await db.execute(select(func.count(Vehicle.row_id)))
                removed = result.scalar() or 0
                await db.execute(delete(Vehicle))
                await db.commit()
            except Exception as e:
                await db.rollback()
                logger.error("Failed to clear vehicles: %s", str(e))
                raise DatabaseError(
                    message="Could not clear the vehicle store.",
                    context={"operation": "clear", "original_error": type(e).__name__},
                )

        logger.info("Vehicle store cleared: %d records removed", removed)
        return removed


vehicle_service = VehicleService()
