"""
Health check endpoint.

Liveness only: the engine has no external dependencies to probe.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Returns healthy if the service is running."""
    return HealthResponse(status="healthy")
