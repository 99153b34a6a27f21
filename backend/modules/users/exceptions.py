"""
Users module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ErrorKind


class ElevationFailedError(ExternalServiceError):
    """Raised when a user could not be promoted to Admin."""

    def __init__(self, user_id: str, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="backend",
            code=ErrorKind.ELEVATION_FAILED.value,
            details={"user_id": user_id, "status_code": status_code},
        )
