"""
Vehicle Registry Backend — Vehicle Route Handlers
===================================================

What:  Handles GET /vehicles/test (public) and POST /admin/vehicles (admin).
How:   The admin route depends on the bearer-token gate, decodes the body
       into VehicleCreate, and delegates storage to VehicleService.

Responses are plain text. Error paths:
    401  missing bearer token (AuthenticationError)
    403  decodable token without the admin role (AuthorizationError)
    422  malformed body (FastAPI default)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_api.config import settings
from vehicle_api.database import get_db_session
from vehicle_api.schemas.vehicle import ErrorResponse, VehicleCreate
from vehicle_api.security import Caller, require_role
from vehicle_api.services.vehicle_service import vehicle_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Vehicles"])

PUBLIC_TEST_MESSAGE = "Endpoint público funcionando"


@router.get(
    "/vehicles/test",
    response_class=PlainTextResponse,
    summary="Public test endpoint",
    description="Always answers 200 with a fixed public marker. No authorization.",
)
async def public_test() -> str:
    return PUBLIC_TEST_MESSAGE


@router.post(
    "/admin/vehicles",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Vehicle registered", "content": {"text/plain": {}}},
        401: {"description": "Missing or rejected bearer token", "model": ErrorResponse},
        403: {"description": "Token lacks the admin role", "model": ErrorResponse},
    },
    summary="Register a vehicle",
    description=(
        "Stores a vehicle record in the in-memory registry. Requires a bearer token "
        "with an 'admin' role claim. With the default configuration the token is "
        "NOT verified: any bearer token is accepted."
    ),
)
async def register_vehicle(
    payload: VehicleCreate,
    caller: Caller = Depends(require_role(settings.admin_role)),
    db: AsyncSession = Depends(get_db_session),
) -> str:
    """
    Register one vehicle.

    No uniqueness or format checks: duplicate ids and odd plates/years are
    stored as sent.
    """
    vehicle = await vehicle_service.add(db, payload)
    logger.info(
        "Registration accepted from sub=%s (verified=%s)",
        caller.subject or "unknown",
        caller.verified,
    )
    return f"Veículo {vehicle.model} cadastrado com sucesso"
