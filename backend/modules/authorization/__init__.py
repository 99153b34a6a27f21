"""
Authorization module.

Public API:
- authorize: Allowed/Denied decision for an identity and action
- require: Same check, raising on denial
- Action, DenialReason, AuthorizationDecision: Models
- UnauthenticatedError, InsufficientRoleError: Exceptions
"""

from .models import Action, DenialReason, AuthorizationDecision
from .service import authorize, require
from .exceptions import UnauthenticatedError, InsufficientRoleError

__all__ = [
    "Action",
    "DenialReason",
    "AuthorizationDecision",
    "authorize",
    "require",
    "UnauthenticatedError",
    "InsufficientRoleError",
]
