"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Privilege level of an account. Only these two values are recognized."""

    USER = "User"
    ADMIN = "Admin"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Map a raw role claim to a Role, or None when it is not recognized."""
        if isinstance(value, cls):
            return value
        for role in cls:
            if value == role.value:
                return role
        return None


class SessionIdentity(BaseModel):
    """
    Identity claim resolved from the stored session credential.

    Resolved fresh for every protected action and threaded explicitly into
    the authorization gate and the mutating services. A role of None means
    the credential carried no recognizable role.
    """

    subject_id: str = Field(..., description="Account ID (the token's _id claim)")
    username: Optional[str] = Field(None, description="Display username")
    email: Optional[str] = Field(None, description="Account email")
    role: Optional[Role] = Field(None, description="Recognized role, if any")
    issued_at: Optional[datetime] = Field(None, description="Token issue time")
    expires_at: Optional[datetime] = Field(None, description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
