"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings

from ..dependencies import get_backend_state
from ..state import ReferenceBackend

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    requests: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    backend: ReferenceBackend = Depends(get_backend_state),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running, with the number of requests held.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        requests=len(backend.list_requests()),
    )
