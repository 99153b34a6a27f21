"""
Authorization gate.

Every guarded action requires the Admin role. The same rules are applied
by the reference backend.
"""

from typing import Optional

from shared.models import Role, SessionIdentity

from .models import Action, AuthorizationDecision, DenialReason
from .exceptions import UnauthenticatedError, InsufficientRoleError

# Role each action requires.
REQUIRED_ROLE: dict[Action, Role] = {
    Action.VIEW_MODERATION_DASHBOARD: Role.ADMIN,
    Action.TRANSITION_REQUEST: Role.ADMIN,
    Action.ELEVATE_ROLE: Role.ADMIN,
}


def _role_satisfies(role: Optional[Role], required: Role) -> bool:
    if role is None:
        return False
    if role is Role.ADMIN:
        return True
    if role is Role.USER:
        return required is Role.USER
    raise AssertionError(f"Unhandled role: {role}")


def authorize(identity: Optional[SessionIdentity], action: Action) -> AuthorizationDecision:
    """
    Decide whether ``identity`` may perform ``action``.

    Args:
        identity: Resolved session identity, or None when unauthenticated
        action: The action being attempted

    Returns:
        AuthorizationDecision; never raises
    """
    if identity is None:
        return AuthorizationDecision.deny(action, DenialReason.UNAUTHENTICATED)
    if not _role_satisfies(identity.role, REQUIRED_ROLE[action]):
        return AuthorizationDecision.deny(action, DenialReason.INSUFFICIENT_ROLE)
    return AuthorizationDecision.allow(action)


def require(identity: Optional[SessionIdentity], action: Action) -> SessionIdentity:
    """
    Enforce the gate, raising on denial.

    Returns:
        The identity, guaranteed non-None

    Raises:
        UnauthenticatedError: If identity is None
        InsufficientRoleError: If the role does not permit the action
    """
    decision = authorize(identity, action)
    if identity is None or decision.reason is DenialReason.UNAUTHENTICATED:
        raise UnauthenticatedError(action.value)
    if decision.denied:
        role = identity.role.value if identity.role else None
        raise InsufficientRoleError(action.value, role)
    return identity
