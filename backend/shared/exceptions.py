"""
Base exception classes for the admin console.

Each module should define its own exceptions that inherit from these bases.
Every concrete error carries an ErrorKind as its code, so callers can
branch on the kind without importing every exception class.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every workflow operation."""

    UNAUTHENTICATED = "Unauthenticated"
    INSUFFICIENT_ROLE = "InsufficientRole"
    FETCH_FAILED = "FetchFailed"
    INVALID_TRANSITION = "InvalidTransition"
    TRANSITION_FAILED = "TransitionFailed"
    TRANSITION_IN_FLIGHT = "TransitionInFlight"
    ELEVATION_FAILED = "ElevationFailed"
    DECODE_FAILED = "DecodeFailed"
    LOGOUT_FAILED = "LogoutFailed"


class AdminConsoleError(Exception):
    """
    Base exception for all admin console errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    @property
    def kind(self) -> Optional[ErrorKind]:
        """The ErrorKind for this error, or None for uncategorized errors."""
        try:
            return ErrorKind(self.code)
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AdminConsoleError):
    """Resource not found."""

    pass


class ValidationError(AdminConsoleError):
    """Input validation failed."""

    pass


class AuthenticationError(AdminConsoleError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AdminConsoleError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(AdminConsoleError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class BackendError(ExternalServiceError):
    """
    The donation backend answered with a non-success status or was unreachable.

    ``message`` is the backend-provided message when the body carried one,
    otherwise the fallback supplied by the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        backend_message: Optional[str] = None,
    ):
        super().__init__(
            message,
            service="backend",
            code="BACKEND_ERROR",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.backend_message = backend_message
