"""
Shared infrastructure for the admin console.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- http: Backend HTTP client
- single_flight: Per-key in-flight guard
- exceptions: Base exception classes and the ErrorKind taxonomy

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .http import BackendClient, bearer
from .single_flight import SingleFlight
from .exceptions import (
    ErrorKind,
    AdminConsoleError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    BackendError,
)
from .models import Role, SessionIdentity

__all__ = [
    "Settings",
    "get_settings",
    "BackendClient",
    "bearer",
    "SingleFlight",
    "ErrorKind",
    "AdminConsoleError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "BackendError",
    "Role",
    "SessionIdentity",
]
