"""
Users module.

Public API:
- IRoleElevationService: Interface for user listing and role elevation
- RoleElevationService: Implementation over the donation backend
- User: Model
- ElevationFailedError: Exception
"""

from .interfaces import IRoleElevationService
from .models import User, ChangeRolePayload
from .service import RoleElevationService
from .exceptions import ElevationFailedError

__all__ = [
    "IRoleElevationService",
    "RoleElevationService",
    "User",
    "ChangeRolePayload",
    "ElevationFailedError",
]
