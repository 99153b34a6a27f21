"""
Session identity service.

Resolves the caller's identity from the stored session token and handles
sign-in and sign-out against the donation backend.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.exceptions import BackendError
from shared.http import BackendClient
from shared.models import Role, SessionIdentity

from .interfaces import ICredentialStore, IIdentityResolver
from .models import TokenClaims
from .exceptions import DecodeFailedError, LogoutFailedError
from .store import FileCredentialStore

logger = logging.getLogger(__name__)

LOGOUT_PATH = "/users/logout"


def _timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def decode_identity(
    token: Optional[str],
    secret: str = "",
    algorithms: Optional[list[str]] = None,
) -> SessionIdentity:
    """
    Decode a session token into a SessionIdentity.

    When ``secret`` is set the signature is verified; otherwise the claims
    are read as-is. Expiry is enforced either way.

    Raises:
        DecodeFailedError: If the token is missing, malformed, expired,
            badly signed or lacks a subject ID
    """
    if not token:
        raise DecodeFailedError("No session credential found")

    options = {
        "verify_signature": bool(secret),
        "verify_exp": True,
        "verify_aud": False,
    }

    try:
        if secret:
            payload = jwt.decode(
                token,
                secret,
                algorithms=algorithms or ["HS256"],
                options=options,
            )
        else:
            payload = jwt.decode(token, options=options)
        claims = TokenClaims(**payload)
    except jwt.ExpiredSignatureError:
        raise DecodeFailedError("Session credential has expired")
    except jwt.InvalidTokenError as e:
        raise DecodeFailedError(f"Invalid session credential: {e}")
    except PydanticValidationError:
        raise DecodeFailedError("Session credential is missing required claims")

    try:
        issued_at = _timestamp(claims.iat)
        expires_at = _timestamp(claims.exp)
    except (ValueError, OverflowError, OSError):
        raise DecodeFailedError("Session credential has invalid timestamps")

    role = Role.parse(claims.role)
    if role is None and claims.role is not None:
        logger.warning(f"Unrecognized role claim {claims.role!r}; treating as no role")

    return SessionIdentity(
        subject_id=claims.subject_id,
        username=claims.username,
        email=claims.email,
        role=role,
        issued_at=issued_at,
        expires_at=expires_at,
    )


def greeting(identity: Optional[SessionIdentity]) -> str:
    """Welcome line shown when the dashboard opens."""
    if identity is None or identity.role is None:
        return "User has no role."
    if identity.role is Role.ADMIN:
        return f"Welcome Admin {identity.username}"
    if identity.role is Role.USER:
        return f"Welcome User {identity.username}"
    raise AssertionError(f"Unhandled role: {identity.role}")


class SessionService(IIdentityResolver):
    """
    Resolves identities from a credential store and manages the session.

    The store is read on every call so that a sign-in or sign-out made
    elsewhere is picked up without restarting.
    """

    def __init__(
        self,
        store: ICredentialStore,
        backend: Optional[BackendClient] = None,
        secret: Optional[str] = None,
        algorithms: Optional[list[str]] = None,
    ):
        settings = get_settings()
        self._store = store
        self._backend = backend or BackendClient()
        self._secret = settings.jwt_secret if secret is None else secret
        self._algorithms = algorithms or settings.jwt_algorithms

    @property
    def store(self) -> ICredentialStore:
        return self._store

    def decode(self, token: Optional[str]) -> SessionIdentity:
        """Strictly decode ``token`` with this service's verification settings."""
        return decode_identity(token, self._secret, self._algorithms)

    def resolve_identity(self) -> Optional[SessionIdentity]:
        """Resolve the identity for the current credential, or None."""
        try:
            return self.decode(self._store.get())
        except DecodeFailedError as e:
            logger.warning(f"No usable session: {e.message}")
            return None

    def sign_in(self, token: str) -> SessionIdentity:
        """
        Store a new session credential.

        The token is decoded first so that an unusable credential never
        replaces a working one.

        Raises:
            DecodeFailedError: If the token cannot be decoded
        """
        identity = self.decode(token)
        self._store.set(token)
        logger.info(f"Signed in as {identity.username or identity.subject_id}")
        return identity

    async def sign_out(self) -> None:
        """
        End the session on the backend, then discard the local credential.

        Raises:
            LogoutFailedError: If the backend call fails; the stored
                credential is kept in that case
        """
        try:
            await self._backend.request(
                "POST",
                LOGOUT_PATH,
                fallback_message="Failed to log out",
            )
        except BackendError as e:
            logger.error(f"Logout failed: {e.message}")
            raise LogoutFailedError(e.message) from e

        self._store.clear()
        logger.info("Signed out")


# Module-level instance getter
_service_instance: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get the session service singleton backed by the configured token file."""
    global _service_instance
    if _service_instance is None:
        settings = get_settings()
        _service_instance = SessionService(FileCredentialStore(settings.credential_path))
    return _service_instance


def reset_session_service() -> None:
    """Reset the session service singleton (for testing)."""
    global _service_instance
    _service_instance = None
