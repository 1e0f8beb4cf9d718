"""
Pydantic models for connector authentication.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Service credentials exchanged for an access token."""
    serviceKey: str = Field(..., min_length=1)
    secretKey: str = Field(..., min_length=1)
