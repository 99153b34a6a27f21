"""
Authorization module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Action(str, Enum):
    """Actions guarded by the authorization gate."""

    VIEW_MODERATION_DASHBOARD = "ViewModerationDashboard"
    TRANSITION_REQUEST = "TransitionRequest"
    ELEVATE_ROLE = "ElevateRole"


class DenialReason(str, Enum):
    """Why an action was denied."""

    UNAUTHENTICATED = "Unauthenticated"
    INSUFFICIENT_ROLE = "InsufficientRole"


class AuthorizationDecision(BaseModel):
    """Outcome of an authorization check: Allowed, or Denied with a reason."""

    action: Action
    allowed: bool
    reason: Optional[DenialReason] = Field(None, description="Set only when denied")

    model_config = {"frozen": True}

    @classmethod
    def allow(cls, action: Action) -> "AuthorizationDecision":
        return cls(action=action, allowed=True)

    @classmethod
    def deny(cls, action: Action, reason: DenialReason) -> "AuthorizationDecision":
        return cls(action=action, allowed=False, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed
