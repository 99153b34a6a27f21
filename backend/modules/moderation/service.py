"""
Request lifecycle store.

Holds the loaded blood requests and moves them from Pending to Accepted
or Rejected. Local state changes only after the backend confirms.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.exceptions import BackendError
from shared.http import BackendClient
from shared.models import SessionIdentity
from shared.single_flight import SingleFlight
from modules.authorization import Action, require

from .interfaces import IRequestLifecycleStore
from .models import BloodRequest, RequestStatus, TransitionPayload, TRANSITION_TARGETS
from .exceptions import (
    FetchFailedError,
    InvalidTransitionError,
    TransitionInFlightError,
    TransitionFailedError,
)

logger = logging.getLogger(__name__)

GET_ALL_REQUESTS_PATH = "/bloodrequest/getAllRequest"
TRANSITION_PATH = "/acceptRequest/acceptRequest"


def _parse_requests(records: Iterable[Any]) -> Iterator[BloodRequest]:
    """Yield valid requests, skipping records that do not validate."""
    for record in records:
        try:
            yield BloodRequest.model_validate(record)
        except PydanticValidationError as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                f"Skipping malformed request {record_id!r}: {e.error_count()} validation error(s)"
            )


class RequestLifecycleStore(IRequestLifecycleStore):
    """
    In-memory request collection backing one moderation view.

    The three moderation queues are filters over ``_requests``; a
    transition updates the one record, so it leaves its source queue
    everywhere at once.
    """

    def __init__(
        self,
        backend: Optional[BackendClient] = None,
        allow_rejected_reaccept: Optional[bool] = None,
    ):
        settings = get_settings()
        self._backend = backend or BackendClient()
        self._allow_rejected_reaccept = (
            settings.allow_rejected_reaccept
            if allow_rejected_reaccept is None
            else allow_rejected_reaccept
        )
        self._requests: dict[str, BloodRequest] = {}
        self._in_flight = SingleFlight()

    @property
    def allow_rejected_reaccept(self) -> bool:
        return self._allow_rejected_reaccept

    async def load_requests(self) -> list[BloodRequest]:
        try:
            body = await self._backend.request(
                "GET",
                GET_ALL_REQUESTS_PATH,
                fallback_message="Failed to fetch requests.",
            )
        except BackendError as e:
            raise FetchFailedError(e.message, e.status_code) from e

        records = body.get("data") or []
        self._requests = {request.id: request for request in _parse_requests(records)}
        logger.info(f"Loaded {len(self._requests)} blood requests")
        return list(self._requests.values())

    def queue_for(self, status: RequestStatus) -> list[BloodRequest]:
        return [r for r in self._requests.values() if r.status is status]

    def get(self, request_id: str) -> Optional[BloodRequest]:
        return self._requests.get(request_id)

    def is_in_flight(self, request_id: str) -> bool:
        return self._in_flight.is_locked(request_id)

    def _check_transition(self, request_id: str, target_status: RequestStatus) -> BloodRequest:
        if target_status not in TRANSITION_TARGETS:
            raise InvalidTransitionError(
                request_id, f"{target_status.value} is not a moderation outcome"
            )

        request = self._requests.get(request_id)
        if request is None:
            raise InvalidTransitionError(request_id, "request is not loaded")

        if request.status is RequestStatus.PENDING:
            return request
        if (
            request.status is RequestStatus.REJECTED
            and target_status is RequestStatus.ACCEPTED
            and self._allow_rejected_reaccept
        ):
            return request
        raise InvalidTransitionError(request_id, f"request is already {request.status.value}")

    async def transition(
        self,
        request_id: str,
        target_status: RequestStatus,
        acting_user: Optional[SessionIdentity],
    ) -> BloodRequest:
        moderator = require(acting_user, Action.TRANSITION_REQUEST)
        request = self._check_transition(request_id, target_status)

        is_accepted = target_status is RequestStatus.ACCEPTED
        payload = TransitionPayload(
            request_id=request_id,
            user_id=moderator.subject_id,
            is_accepted=is_accepted,
        )
        verb = "accept" if is_accepted else "reject"

        async with self._in_flight.guard(request_id, TransitionInFlightError):
            try:
                await self._backend.request(
                    "POST",
                    TRANSITION_PATH,
                    json=payload.to_wire(),
                    fallback_message=f"Failed to {verb} the request.",
                )
            except BackendError as e:
                raise TransitionFailedError(request_id, e.message, e.status_code) from e

            # A reload may have replaced the collection while we waited.
            current = self._requests.get(request_id)
            updated = (current or request).model_copy(update={"status": target_status})
            if current is not None:
                self._requests[request_id] = updated

        logger.info(
            f"Request {request_id} {target_status.value.lower()} by {moderator.subject_id}"
        )
        return updated

    async def accept(self, request_id: str, acting_user: Optional[SessionIdentity]) -> BloodRequest:
        return await self.transition(request_id, RequestStatus.ACCEPTED, acting_user)

    async def reject(self, request_id: str, acting_user: Optional[SessionIdentity]) -> BloodRequest:
        return await self.transition(request_id, RequestStatus.REJECTED, acting_user)
