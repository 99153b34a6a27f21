"""
In-memory state for the reference backend.

Applies the same authorization gate and request state machine as the
console, so the rules hold even for callers that skip the client checks.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from shared.exceptions import NotFoundError, ValidationError
from shared.models import Role, SessionIdentity
from modules.authorization import Action, require
from modules.moderation.models import BloodRequest, RequestStatus
from modules.users.models import User

logger = logging.getLogger(__name__)


class ResourceNotFoundError(NotFoundError):
    """Raised when a request or user ID is unknown to the backend."""

    def __init__(self, kind: str, resource_id: str):
        super().__init__(
            f"{kind} not found: {resource_id}",
            code="NOT_FOUND",
            details={"id": resource_id},
        )


class AlreadyProcessedError(ValidationError):
    """Raised when a request has already left the Pending state."""

    def __init__(self, request_id: str):
        super().__init__(
            "Request already processed",
            code="ALREADY_PROCESSED",
            details={"request_id": request_id},
        )


class ReferenceBackend:
    """Users and blood requests held in dictionaries, keyed by ID."""

    def __init__(
        self,
        requests: Iterable[BloodRequest] = (),
        users: Iterable[User] = (),
        allow_rejected_reaccept: bool = False,
    ):
        self._requests: dict[str, BloodRequest] = {r.id: r for r in requests}
        self._users: dict[str, User] = {u.id: u for u in users}
        self._allow_rejected_reaccept = allow_rejected_reaccept

    @classmethod
    def from_seed_file(cls, path: Path, allow_rejected_reaccept: bool = False) -> "ReferenceBackend":
        """
        Load state from a JSON file of the form
        ``{"requests": [...], "users": [...]}`` using the wire field names.
        """
        with open(path, encoding="utf-8") as f:
            seed = json.load(f)
        requests = [BloodRequest.model_validate(r) for r in seed.get("requests", [])]
        users = [User.model_validate(u) for u in seed.get("users", [])]
        logger.info(f"Seeded reference backend from {path}: {len(requests)} requests, {len(users)} users")
        return cls(requests, users, allow_rejected_reaccept)

    def identity_for(self, subject_id: Optional[str]) -> Optional[SessionIdentity]:
        """Server-side identity for a subject ID, or None if unknown."""
        if not subject_id:
            return None
        user = self._users.get(subject_id)
        if user is None:
            return None
        return SessionIdentity(subject_id=user.id, username=user.username, email=user.email, role=user.role)

    def list_requests(self) -> list[BloodRequest]:
        return list(self._requests.values())

    def list_users(self, subject_id: Optional[str]) -> list[User]:
        require(self.identity_for(subject_id), Action.VIEW_MODERATION_DASHBOARD)
        return list(self._users.values())

    def moderate(self, request_id: str, user_id: str, is_accepted: bool) -> BloodRequest:
        require(self.identity_for(user_id), Action.TRANSITION_REQUEST)

        request = self._requests.get(request_id)
        if request is None:
            raise ResourceNotFoundError("Request", request_id)

        reaccept = (
            self._allow_rejected_reaccept
            and is_accepted
            and request.status is RequestStatus.REJECTED
        )
        if request.status is not RequestStatus.PENDING and not reaccept:
            raise AlreadyProcessedError(request_id)

        status = RequestStatus.ACCEPTED if is_accepted else RequestStatus.REJECTED
        updated = request.model_copy(update={"status": status, "is_accepted": is_accepted})
        self._requests[request_id] = updated
        logger.info(f"Request {request_id} -> {status.value} (by {user_id})")
        return updated

    def change_role(self, subject_id: Optional[str], user_id: str, role: Role) -> User:
        require(self.identity_for(subject_id), Action.ELEVATE_ROLE)

        if role is not Role.ADMIN:
            raise ValidationError("Only promotion to Admin is supported", code="UNSUPPORTED_ROLE")

        user = self._users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)

        updated = user.model_copy(update={"role": Role.ADMIN})
        self._users[user_id] = updated
        logger.info(f"User {user_id} role set to Admin (by {subject_id})")
        return updated
