"""
Vehicle Registry Backend — Pydantic Request/Response Schemas
==============================================================

What:  Pydantic models defining the API contract.
How:   FastAPI validates request bodies against these models and uses them
       to generate the OpenAPI document.

Wire names:
    The registration body uses Portuguese keys (`modelo`, `placa`, `ano`).
    English keys (`model`, `plate`, `year`) are accepted as aliases so
    either spelling registers the same record.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class VehicleCreate(BaseModel):
    """
    What:  Body of POST /admin/vehicles.
    Note:  No business validation: duplicate ids, negative ids, any plate
           format and any year are accepted as long as the types are right.
    """
    id: int = Field(description="Caller-supplied identifier (not required to be unique)")
    model: str = Field(
        validation_alias=AliasChoices("modelo", "model"),
        description="Model name",
    )
    plate: str = Field(
        validation_alias=AliasChoices("placa", "plate"),
        description="License plate, free-form",
    )
    year: int = Field(
        validation_alias=AliasChoices("ano", "year"),
        description="Model year, unchecked",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"id": 1, "modelo": "Fusca", "placa": "AAA1234", "ano": 1985},
            ]
        }
    }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every application error.

    Example:
        {
            "error": "unauthorized",
            "message": "A bearer token is required",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    records: int = Field(description="Number of vehicle records currently held")
    auth_verification: str = Field(description="Bearer token verification: enabled, disabled")
    uptime_seconds: float = Field(description="Seconds since service started")
