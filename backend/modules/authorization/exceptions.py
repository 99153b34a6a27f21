"""
Authorization module exceptions.

Raised before any network call, so a denied action never has a partial
side effect.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, AuthorizationError, ErrorKind


class UnauthenticatedError(AuthenticationError):
    """Raised when an action is attempted without a usable session."""

    def __init__(self, action: str):
        super().__init__(
            "Invalid user session. Please login again.",
            code=ErrorKind.UNAUTHENTICATED.value,
            details={"action": action},
        )


class InsufficientRoleError(AuthorizationError):
    """Raised when the session's role does not permit the action."""

    def __init__(self, action: str, user_role: Optional[str]):
        super().__init__(
            f"Insufficient permissions for {action}. Required: Admin, has: {user_role or 'no role'}",
            code=ErrorKind.INSUFFICIENT_ROLE.value,
            details={"action": action, "required_role": "Admin", "user_role": user_role},
        )
