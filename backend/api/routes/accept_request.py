"""
Moderation and role management endpoints.

All three endpoints re-check the Admin requirement server-side.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from modules.moderation.models import TransitionPayload
from modules.users.models import ChangeRolePayload

from ..dependencies import get_backend_state, get_bearer_subject
from ..state import ReferenceBackend

router = APIRouter()


@router.post("/acceptRequest")
async def accept_request(
    payload: TransitionPayload,
    backend: ReferenceBackend = Depends(get_backend_state),
) -> dict:
    """
    Accept or reject a blood request.

    ``userId`` in the body names the acting moderator, who must be an Admin.
    """
    request = backend.moderate(payload.request_id, payload.user_id, payload.is_accepted)
    verb = "accepted" if payload.is_accepted else "rejected"
    return {
        "message": f"Request {verb} successfully",
        "data": request.model_dump(by_alias=True, mode="json"),
    }


@router.post("/getAllUser")
async def get_all_users(
    subject_id: Optional[str] = Depends(get_bearer_subject),
    backend: ReferenceBackend = Depends(get_backend_state),
) -> dict:
    """List all users. The Bearer subject must be an Admin."""
    return {
        "data": [
            u.model_dump(by_alias=True, mode="json")
            for u in backend.list_users(subject_id)
        ]
    }


@router.post("/changeRole")
async def change_role(
    payload: ChangeRolePayload,
    subject_id: Optional[str] = Depends(get_bearer_subject),
    backend: ReferenceBackend = Depends(get_backend_state),
) -> dict:
    """Promote a user to Admin. The Bearer subject must be an Admin."""
    user = backend.change_role(subject_id, payload.user_id, payload.role)
    return {
        "message": "User role updated",
        "data": user.model_dump(by_alias=True, mode="json"),
    }
