"""Health check."""

from __future__ import annotations

from fastapi import APIRouter

from polydisplay import __version__
from polydisplay.engine.registry import get_registry
from polydisplay.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        transforms_registered=get_registry().count,
    )
