"""
Dependency injection for the reference backend.

The backend state lives on ``app.state`` so each app instance (and each
test) owns its own data.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .state import ReferenceBackend

# Bearer token extractor; the token is the caller's subject ID
bearer_scheme = HTTPBearer(auto_error=False)


def get_backend_state(request: Request) -> ReferenceBackend:
    """FastAPI dependency for the backend state."""
    return request.app.state.backend


async def get_bearer_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Subject ID from the Authorization header, or None when absent.

    Rejection of a missing or unknown subject is left to the gate.
    """
    if credentials is None:
        return None
    return credentials.credentials
