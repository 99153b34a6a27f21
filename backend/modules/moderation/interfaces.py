"""
Moderation module interface.

The console depends on IRequestLifecycleStore, not the concrete store.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import SessionIdentity

from .models import BloodRequest, RequestStatus


@runtime_checkable
class IRequestLifecycleStore(Protocol):
    """
    Interface for loading and moderating blood requests.

    The pending, accepted and rejected queues are projections of a single
    in-memory collection.
    """

    async def load_requests(self) -> list[BloodRequest]:
        """
        Fetch the full request set and replace the local collection.

        Raises:
            FetchFailedError: If the backend call fails
        """
        ...

    def queue_for(self, status: RequestStatus) -> list[BloodRequest]:
        """Return loaded requests with ``status``, in backend order. No I/O."""
        ...

    def get(self, request_id: str) -> Optional[BloodRequest]:
        """Return a loaded request by ID."""
        ...

    async def transition(
        self,
        request_id: str,
        target_status: RequestStatus,
        acting_user: Optional[SessionIdentity],
    ) -> BloodRequest:
        """
        Accept or reject a request.

        Args:
            request_id: ID of a loaded request
            target_status: Accepted or Rejected
            acting_user: Identity of the moderator

        Returns:
            The request with its new status

        Raises:
            UnauthenticatedError / InsufficientRoleError: Before any I/O
            InvalidTransitionError: Unknown request or disallowed transition
            TransitionInFlightError: Same request already being transitioned
            TransitionFailedError: Backend failure; local state unchanged
        """
        ...
