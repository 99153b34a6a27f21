"""
Session module.

Resolves the caller's identity from the stored session token.

Public API:
- IIdentityResolver / ICredentialStore: Interfaces
- SessionService: Resolver plus sign-in/sign-out
- FileCredentialStore / MemoryCredentialStore: Credential storage
- decode_identity, greeting: Helpers
- Session exceptions: DecodeFailedError, LogoutFailedError
"""

from .interfaces import ICredentialStore, IIdentityResolver
from .models import TokenClaims
from .store import FileCredentialStore, MemoryCredentialStore
from .service import SessionService, decode_identity, greeting
from .exceptions import DecodeFailedError, LogoutFailedError

__all__ = [
    # Interfaces
    "ICredentialStore",
    "IIdentityResolver",
    # Models
    "TokenClaims",
    # Implementations
    "FileCredentialStore",
    "MemoryCredentialStore",
    "SessionService",
    "decode_identity",
    "greeting",
    # Exceptions
    "DecodeFailedError",
    "LogoutFailedError",
]
