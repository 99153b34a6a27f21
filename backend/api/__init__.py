"""
Reference backend package.

Provides an in-memory FastAPI implementation of the donation backend's
moderation endpoints.
"""

from .app import create_app
from .state import ReferenceBackend

__all__ = ["create_app", "ReferenceBackend"]
