"""
Session module interfaces.

Business logic never reads the credential store directly: it depends on
IIdentityResolver, so tests can inject a fake resolver instead of a real
storage medium.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import SessionIdentity


@runtime_checkable
class ICredentialStore(Protocol):
    """Client-side storage holding the opaque session credential."""

    def get(self) -> Optional[str]:
        """Return the stored credential, or None when there is none."""
        ...

    def set(self, token: str) -> None:
        """Replace the stored credential."""
        ...

    def clear(self) -> None:
        """Discard the stored credential. A no-op when nothing is stored."""
        ...


@runtime_checkable
class IIdentityResolver(Protocol):
    """Derives the caller's identity from the current stored credential."""

    def resolve_identity(self) -> Optional[SessionIdentity]:
        """
        Resolve the identity for the credential stored right now.

        Returns:
            SessionIdentity, or None when there is no usable credential.
            Never raises.
        """
        ...
