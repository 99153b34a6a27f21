"""
Blood request endpoints.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_backend_state
from ..state import ReferenceBackend

router = APIRouter()


@router.get("/getAllRequest")
async def get_all_requests(
    backend: ReferenceBackend = Depends(get_backend_state),
) -> dict:
    """List every blood request regardless of status."""
    return {
        "data": [
            r.model_dump(by_alias=True, mode="json")
            for r in backend.list_requests()
        ]
    }
