"""
Moderation module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    AdminConsoleError,
    ExternalServiceError,
    ValidationError,
    ErrorKind,
)


class FetchFailedError(ExternalServiceError):
    """Raised when a collection could not be loaded from the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="backend",
            code=ErrorKind.FETCH_FAILED.value,
            details={"status_code": status_code},
        )


class InvalidTransitionError(ValidationError):
    """Raised when a request cannot move to the requested status."""

    def __init__(self, request_id: str, reason: str):
        super().__init__(
            f"Cannot transition request {request_id}: {reason}",
            code=ErrorKind.INVALID_TRANSITION.value,
            details={"request_id": request_id},
        )


class TransitionInFlightError(AdminConsoleError):
    """Raised when a transition for the same request is already running."""

    def __init__(self, request_id: str):
        super().__init__(
            f"A transition for request {request_id} is already in progress",
            code=ErrorKind.TRANSITION_IN_FLIGHT.value,
            details={"request_id": request_id},
        )


class TransitionFailedError(ExternalServiceError):
    """Raised when the backend rejects or fails a transition."""

    def __init__(self, request_id: str, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="backend",
            code=ErrorKind.TRANSITION_FAILED.value,
            details={"request_id": request_id, "status_code": status_code},
        )
