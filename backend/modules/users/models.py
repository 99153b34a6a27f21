"""
Users module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import Role


class User(BaseModel):
    """An account as listed on the users dashboard."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    username: str = Field(..., description="Username")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Account creation time")
    role: Optional[Role] = Field(default=Role.USER, description="Current role; None when unrecognized")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, value: object) -> Optional[Role]:
        """Unrecognized role strings become None rather than rejecting the record."""
        return Role.parse(value)


class ChangeRolePayload(BaseModel):
    """Body of the change-role call."""

    user_id: str = Field(..., alias="userId")
    role: Role = Field(...)

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
