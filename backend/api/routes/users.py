"""
Account session endpoints.
"""

from fastapi import APIRouter

router = APIRouter()


@router.post("/logout")
async def logout() -> dict:
    """
    End the session.

    Sessions are stateless tokens, so there is nothing to revoke here; the
    client discards its stored credential after a successful response.
    """
    return {"message": "Logged out successfully"}
