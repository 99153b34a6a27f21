"""
Blood Bank Admin - terminal console for moderating blood requests.

Staff review pending, accepted and rejected blood requests, accept or
reject pending ones, and promote users to administrators. The session
token is kept in a local file, the command-line analogue of the web
dashboard's auth cookie.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from shared.config import get_settings
from shared.http import BackendClient
from modules.moderation import RequestLifecycleStore, RequestStatus
from modules.session import FileCredentialStore, SessionService
from modules.users import RoleElevationService
from console import AdminConsole, EXIT_FAILURE
from console.display import console

QUEUES = {
    "pending": RequestStatus.PENDING,
    "accepted": RequestStatus.ACCEPTED,
    "rejected": RequestStatus.REJECTED,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def build_console(
    base_url: Optional[str] = None,
    credential_path: Optional[Path] = None,
) -> AdminConsole:
    """Wire the services for one console invocation."""
    settings = get_settings()
    backend = BackendClient(base_url=base_url)
    store = FileCredentialStore(credential_path or settings.credential_path)
    return AdminConsole(
        session=SessionService(store, backend),
        requests=RequestLifecycleStore(backend),
        users=RoleElevationService(backend),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Moderate blood requests and manage administrator roles"
    )
    parser.add_argument("--api-url", type=str, help="Backend base URL (default: from settings)")
    parser.add_argument("--token-file", type=Path, help="Session token file (default: from settings)")
    parser.add_argument("--log-level", type=str, help="Logging level (default: from settings)")

    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Store a session token")
    login.add_argument("token", help="Session token issued at sign-in")

    sub.add_parser("logout", help="End the session and discard the stored token")
    sub.add_parser("whoami", help="Show the current session identity")

    requests = sub.add_parser("requests", help="List a moderation queue")
    requests.add_argument(
        "--status", "-s",
        choices=sorted(QUEUES),
        default="pending",
        help="Queue to list (default: pending)",
    )

    show = sub.add_parser("show", help="Show a request's details")
    show.add_argument("request_id")

    accept = sub.add_parser("accept", help="Accept a request")
    accept.add_argument("request_id")

    reject = sub.add_parser("reject", help="Reject a pending request")
    reject.add_argument("request_id")

    sub.add_parser("users", help="List users")

    make_admin = sub.add_parser("make-admin", help="Promote a user to Admin")
    make_admin.add_argument("user_id")

    return parser


async def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command line to the console."""
    admin = build_console(args.api_url, args.token_file)

    if args.command == "login":
        return await admin.login(args.token)
    if args.command == "logout":
        return await admin.logout()
    if args.command == "whoami":
        return await admin.whoami()
    if args.command == "requests":
        return await admin.list_requests(QUEUES[args.status])
    if args.command == "show":
        return await admin.show_request(args.request_id)
    if args.command == "accept":
        return await admin.transition(args.request_id, RequestStatus.ACCEPTED)
    if args.command == "reject":
        return await admin.transition(args.request_id, RequestStatus.REJECTED)
    if args.command == "users":
        return await admin.list_users()
    if args.command == "make-admin":
        return await admin.make_admin(args.user_id)

    console.print(f"[red]Error:[/red] Unknown command: {args.command}")
    return EXIT_FAILURE


def cli(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(cli())
