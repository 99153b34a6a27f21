"""
Moderation module.

Loads blood requests and moves them through the moderation lifecycle.

Public API:
- IRequestLifecycleStore: Interface for moderation operations
- RequestLifecycleStore: Implementation over the donation backend
- BloodRequest, RequestStatus: Models
- Moderation exceptions
"""

from .interfaces import IRequestLifecycleStore
from .models import BloodRequest, RequestStatus, TransitionPayload
from .service import RequestLifecycleStore
from .exceptions import (
    FetchFailedError,
    InvalidTransitionError,
    TransitionInFlightError,
    TransitionFailedError,
)

__all__ = [
    # Interface
    "IRequestLifecycleStore",
    # Implementation
    "RequestLifecycleStore",
    # Models
    "BloodRequest",
    "RequestStatus",
    "TransitionPayload",
    # Exceptions
    "FetchFailedError",
    "InvalidTransitionError",
    "TransitionInFlightError",
    "TransitionFailedError",
]
