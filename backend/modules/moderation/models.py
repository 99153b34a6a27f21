"""
Moderation module data models.

Field names are snake_case; aliases match the donation backend's JSON.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RequestStatus(str, Enum):
    """Blood request lifecycle status."""

    PENDING = "Pending"    # Awaiting moderation
    ACCEPTED = "Accepted"  # Terminal
    REJECTED = "Rejected"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


# Statuses a transition may target
TRANSITION_TARGETS = frozenset({RequestStatus.ACCEPTED, RequestStatus.REJECTED})


class BloodRequest(BaseModel):
    """A blood request as returned by the backend."""

    id: str = Field(..., description="Unique request ID")
    blood_type_id: str = Field(..., alias="bloodTypeId", description="Requested blood type")
    quantity: int = Field(..., gt=0, description="Units requested")
    request_date: datetime = Field(..., description="When the request was filed")
    required_by: Optional[datetime] = Field(None, description="Date the blood is needed by")
    status: RequestStatus = Field(..., description="Lifecycle status")
    delivery_address: Optional[str] = Field(None, description="Delivery address")
    contact_number: Optional[str] = Field(None, description="Contact phone number")
    reason_for_request: Optional[str] = Field(None, description="Stated reason")
    hospital_name: Optional[str] = Field(None, description="Receiving hospital")
    urgent: Optional[bool] = Field(None, description="Urgency flag (may be unset)")
    owner_user_id: str = Field(..., alias="userId", description="Requester's user ID")

    # Read-only bookkeeping flags maintained by the backend
    is_accepted: Optional[bool] = Field(None, alias="isAccepted")
    is_qr_sent: Optional[bool] = Field(None, alias="isQrSent")
    is_mail_sent: Optional[bool] = Field(None, alias="isMailSent")
    is_approved: Optional[bool] = Field(None, alias="isApproved")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }


class TransitionPayload(BaseModel):
    """Body of the accept/reject call."""

    request_id: str = Field(..., alias="requestId")
    user_id: str = Field(..., alias="userId", description="Acting moderator's ID")
    is_accepted: bool = Field(..., alias="isAccepted")

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
