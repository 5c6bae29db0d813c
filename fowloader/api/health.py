"""
Health check endpoints.

Provides a liveness probe and the importer's current state.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fowloader.api.imports import get_importer
from fowloader.services.importer import DeckImporter

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    importer: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    """
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def ready(
    importer: Annotated[DeckImporter, Depends(get_importer)],
) -> HealthResponse:
    """
    Readiness probe.

    Reports whether the importer is idle or busy with an import.
    """
    return HealthResponse(status="ready", importer=importer.state.value)
