"""
Session module data models.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """
    Decoded session token payload.

    Matches the claims issued by the donation backend at sign-in.
    """

    subject_id: str = Field(..., alias="_id", description="Account ID")
    username: Optional[str] = Field(None, description="Display username")
    email: Optional[str] = Field(None, description="Account email")
    role: Optional[Any] = Field(None, description="Raw role claim")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")

    model_config = {"populate_by_name": True, "extra": "ignore"}
