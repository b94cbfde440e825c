"""
Vehicle Registry Backend — Vehicle SQLAlchemy Model
=====================================================

What:  ORM model representing the `vehicles` table in the in-memory store.
How:   Inherits from the shared DeclarativeBase; tables are created at startup.
Who:   Used by VehicleService for add/count/clear.

Table Design:
    - row_id: surrogate autoincrement key. The caller-supplied identifier is
      NOT the primary key, so two records posted with the same `id` are both
      kept.
    - vehicle_id: the caller's identifier, stored verbatim (no uniqueness,
      no sign check).
    - model / plate / year: pass-through fields, never validated.
    - created_at: UTC insertion time.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_api.database import Base


class Vehicle(Base):
    """
    A registered vehicle.

    Lifecycle:
        Created only by POST /admin/vehicles. Never updated, never deleted
        through the API. Lost when the process exits.
    """

    __tablename__ = "vehicles"

    row_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    vehicle_id: Mapped[int] = mapped_column(
        "vehicle_id",
        Integer,
        nullable=False,
        index=True,
        comment="Caller-supplied identifier; not unique",
    )

    model: Mapped[str] = mapped_column(String, nullable=False)

    plate: Mapped[str] = mapped_column(String, nullable=False)

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return (
            f"<Vehicle(row_id={self.row_id}, id={self.vehicle_id}, "
            f"model='{self.model}', plate='{self.plate}', year={self.year})>"
        )
