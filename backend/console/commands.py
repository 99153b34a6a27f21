"""
Console commands.

Each command resolves the session identity afresh, consults the
authorization gate to decide what to show, calls the workflow services
and renders the outcome. Failures are reported as a single error line and
a non-zero exit code; they never escape as tracebacks.
"""

import logging
from typing import Optional

from shared.exceptions import AdminConsoleError
from shared.models import SessionIdentity
from modules.authorization import Action, DenialReason, authorize
from modules.moderation import IRequestLifecycleStore, RequestStatus
from modules.session import SessionService, greeting
from modules.users import IRoleElevationService

from .display import (
    console,
    request_panel,
    requests_table,
    toast_error,
    toast_info,
    toast_success,
    users_table,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

DENIAL_MESSAGES = {
    DenialReason.UNAUTHENTICATED: "Invalid user session. Please login again.",
    DenialReason.INSUFFICIENT_ROLE: "Only administrators can use the dashboard.",
}


class AdminConsole:
    """Presentation adapter over the moderation and role elevation services."""

    def __init__(
        self,
        session: SessionService,
        requests: IRequestLifecycleStore,
        users: IRoleElevationService,
    ):
        self._session = session
        self._requests = requests
        self._users = users

    def _dashboard_identity(self) -> Optional[SessionIdentity]:
        """Resolve the identity and check dashboard access, reporting denials."""
        identity = self._session.resolve_identity()
        decision = authorize(identity, Action.VIEW_MODERATION_DASHBOARD)
        if decision.denied:
            toast_error(DENIAL_MESSAGES[decision.reason])
            return None
        return identity

    async def login(self, token: str) -> int:
        try:
            identity = self._session.sign_in(token)
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE
        toast_success(greeting(identity))
        return EXIT_OK

    async def logout(self) -> int:
        try:
            await self._session.sign_out()
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE
        toast_success("Logged out.")
        return EXIT_OK

    async def whoami(self) -> int:
        identity = self._session.resolve_identity()
        if identity is None:
            toast_error("Not signed in.")
            return EXIT_FAILURE
        toast_success(greeting(identity))
        console.print(f"[dim]Subject: {identity.subject_id}[/dim]")
        if identity.expires_at:
            console.print(f"[dim]Expires: {identity.expires_at.isoformat()}[/dim]")
        return EXIT_OK

    async def list_requests(self, status: RequestStatus) -> int:
        if self._dashboard_identity() is None:
            return EXIT_FAILURE
        try:
            await self._requests.load_requests()
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE

        queue = self._requests.queue_for(status)
        if not queue:
            toast_info(f"No {status.value.lower()} requests found.")
            return EXIT_OK
        console.print(requests_table(queue, status))
        return EXIT_OK

    async def show_request(self, request_id: str) -> int:
        if self._dashboard_identity() is None:
            return EXIT_FAILURE
        try:
            await self._requests.load_requests()
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE

        request = self._requests.get(request_id)
        if request is None:
            toast_error(f"Request not found: {request_id}")
            return EXIT_FAILURE
        console.print(request_panel(request))
        return EXIT_OK

    async def transition(self, request_id: str, target: RequestStatus) -> int:
        identity = self._dashboard_identity()
        if identity is None:
            return EXIT_FAILURE
        try:
            await self._requests.load_requests()
            with console.status(f"Submitting {target.value.lower()} for {request_id}..."):
                await self._requests.transition(request_id, target, identity)
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE

        verb = "accepted" if target is RequestStatus.ACCEPTED else "rejected"
        toast_success(f"Request {verb} successfully!")
        return EXIT_OK

    async def list_users(self) -> int:
        identity = self._dashboard_identity()
        if identity is None:
            return EXIT_FAILURE
        try:
            users = await self._users.load_users(identity)
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE
        console.print(users_table(users))
        return EXIT_OK

    async def make_admin(self, user_id: str) -> int:
        identity = self._dashboard_identity()
        if identity is None:
            return EXIT_FAILURE
        try:
            await self._users.load_users(identity)
            with console.status("Updating..."):
                await self._users.elevate_to_admin(user_id, identity)
        except AdminConsoleError as e:
            toast_error(e.message)
            return EXIT_FAILURE
        toast_success("User role updated to Admin!")
        return EXIT_OK
