"""Rich terminal rendering for the admin console."""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from modules.moderation.models import BloodRequest, RequestStatus
from modules.users.models import User

console = Console()

STATUS_STYLES = {
    RequestStatus.PENDING: "yellow",
    RequestStatus.ACCEPTED: "green",
    RequestStatus.REJECTED: "red",
}


def format_date(value: Optional[datetime]) -> str:
    """Render a timestamp as a plain date, or a dash when unset."""
    return value.date().isoformat() if value else "-"


def yes_no(value: Optional[bool]) -> str:
    return "Yes" if value else "No"


def toast_success(message: str) -> None:
    console.print(f"[green]✔[/green] {message}")


def toast_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")


def toast_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def requests_table(requests: list[BloodRequest], status: RequestStatus) -> Table:
    """Build the queue table for one moderation status."""
    table = Table(title=f"Manage {status.value} Requests", header_style="bold")
    table.add_column("Request ID")
    table.add_column("Blood Type")
    table.add_column("Quantity", justify="right")
    table.add_column("Request Date")
    table.add_column("Urgent")
    table.add_column("Status")

    style = STATUS_STYLES[status]
    for request in requests:
        table.add_row(
            request.id,
            request.blood_type_id,
            str(request.quantity),
            format_date(request.request_date),
            yes_no(request.urgent),
            f"[{style}]{request.status.value}[/{style}]",
        )
    return table


def request_panel(request: BloodRequest) -> Panel:
    """Detail view for a single request, mirroring the dashboard modal."""
    rows = [
        ("Blood Type", request.blood_type_id),
        ("Quantity", f"{request.quantity} units"),
        ("Request Date", format_date(request.request_date)),
        ("Required By", format_date(request.required_by)),
        ("Delivery Address", request.delivery_address or "-"),
        ("Hospital Name", request.hospital_name or "-"),
        ("Contact Number", request.contact_number or "-"),
        ("Reason for Request", request.reason_for_request or "-"),
        ("Urgent", yes_no(request.urgent)),
        ("Accepted", yes_no(request.is_accepted)),
        ("Status", request.status.value),
        ("Requested By", request.owner_user_id),
    ]
    body = "\n".join(f"[bold]{label}:[/bold] {value}" for label, value in rows)
    return Panel(body, title=f"Request {request.id}", border_style="blue")


def users_table(users: list[User]) -> Table:
    table = Table(title="Manage Users", header_style="bold")
    table.add_column("User ID")
    table.add_column("Email")
    table.add_column("Username")
    table.add_column("Created At")
    table.add_column("Role")

    for user in users:
        table.add_row(
            user.id,
            user.email,
            user.username,
            format_date(user.created_at),
            user.role.value if user.role else "No role",
        )
    return table
