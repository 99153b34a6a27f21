"""
Session module exceptions.

Decode failures are raised only by the strict decoding path; the identity
resolver converts them into an unauthenticated (None) identity.
"""

from shared.exceptions import AuthenticationError, ExternalServiceError, ErrorKind


class DecodeFailedError(AuthenticationError):
    """Raised when a session credential is missing, malformed or expired."""

    def __init__(self, message: str = "Session credential could not be decoded"):
        super().__init__(message, code=ErrorKind.DECODE_FAILED.value)


class LogoutFailedError(ExternalServiceError):
    """Raised when the backend refuses or fails the logout call."""

    def __init__(self, message: str = "Failed to log out"):
        super().__init__(
            message,
            service="backend",
            code=ErrorKind.LOGOUT_FAILED.value,
        )
