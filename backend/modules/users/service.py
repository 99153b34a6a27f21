"""
Role elevation service.

Lists accounts and promotes them to Admin. Calls authenticate with the
acting admin's subject ID as a Bearer token.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import BackendError
from shared.http import BackendClient, bearer
from shared.models import Role, SessionIdentity
from modules.authorization import Action, require
from modules.moderation.exceptions import FetchFailedError

from .interfaces import IRoleElevationService
from .models import User, ChangeRolePayload
from .exceptions import ElevationFailedError

logger = logging.getLogger(__name__)

GET_ALL_USERS_PATH = "/acceptRequest/getAllUser"
CHANGE_ROLE_PATH = "/acceptRequest/changeRole"


class RoleElevationService(IRoleElevationService):
    """Local user projection plus the User -> Admin mutation."""

    def __init__(self, backend: Optional[BackendClient] = None):
        self._backend = backend or BackendClient()
        self._users: dict[str, User] = {}

    async def load_users(self, acting_identity: Optional[SessionIdentity]) -> list[User]:
        admin = require(acting_identity, Action.VIEW_MODERATION_DASHBOARD)

        try:
            body = await self._backend.request(
                "POST",
                GET_ALL_USERS_PATH,
                headers=bearer(admin.subject_id),
                fallback_message="Failed to fetch users.",
            )
        except BackendError as e:
            raise FetchFailedError(e.message, e.status_code) from e

        users: dict[str, User] = {}
        for record in body.get("data") or []:
            try:
                user = User.model_validate(record)
            except PydanticValidationError:
                logger.warning(f"Skipping malformed user record: {record!r}")
                continue
            users[user.id] = user

        self._users = users
        logger.info(f"Loaded {len(users)} users")
        return list(users.values())

    def users(self) -> list[User]:
        return list(self._users.values())

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def elevate_to_admin(
        self,
        target_user_id: str,
        acting_identity: Optional[SessionIdentity],
    ) -> User:
        admin = require(acting_identity, Action.ELEVATE_ROLE)

        user = self._users.get(target_user_id)
        if user is None:
            raise ElevationFailedError(target_user_id, f"User not found: {target_user_id}")

        payload = ChangeRolePayload(user_id=target_user_id, role=Role.ADMIN)
        try:
            await self._backend.request(
                "POST",
                CHANGE_ROLE_PATH,
                json=payload.to_wire(),
                headers=bearer(admin.subject_id),
                fallback_message="Failed to change role.",
            )
        except BackendError as e:
            raise ElevationFailedError(target_user_id, e.message, e.status_code) from e

        # A reload may have replaced the projection while we waited.
        current = self._users.get(target_user_id)
        updated = (current or user).model_copy(update={"role": Role.ADMIN})
        if current is not None:
            self._users[target_user_id] = updated
        logger.info(f"User {target_user_id} elevated to Admin by {admin.subject_id}")
        return updated
