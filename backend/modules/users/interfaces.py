"""
Users module interface.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import SessionIdentity

from .models import User


@runtime_checkable
class IRoleElevationService(Protocol):
    """
    Interface for listing users and promoting them to Admin.

    Only the User -> Admin direction is exposed; there is no demotion.
    """

    async def load_users(self, acting_identity: Optional[SessionIdentity]) -> list[User]:
        """
        Fetch all users into the local projection.

        Raises:
            UnauthenticatedError / InsufficientRoleError: Before any I/O
            FetchFailedError: If the backend call fails
        """
        ...

    def users(self) -> list[User]:
        """Return the local user projection."""
        ...

    async def elevate_to_admin(
        self,
        target_user_id: str,
        acting_identity: Optional[SessionIdentity],
    ) -> User:
        """
        Promote a user to Admin. Idempotent.

        Returns:
            The user with role Admin

        Raises:
            UnauthenticatedError / InsufficientRoleError: Before any I/O
            ElevationFailedError: Unknown user or backend failure; local
                state unchanged
        """
        ...
