"""
Vehicle Registry Backend — Root Route
=======================================

GET / answers a fixed status string. No dependencies are touched, so it
stays up even when the record store is not.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Root"])

ROOT_MESSAGE = "API de veículos no ar"


@router.get("/", response_class=PlainTextResponse, summary="Service status string")
async def root() -> str:
    return ROOT_MESSAGE
