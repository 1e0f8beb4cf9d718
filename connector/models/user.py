"""
User model for the consent connector.

The connector only reads and occasionally updates these records; the
collection itself is owned by the wider platform.
"""

from typing import Optional
from pydantic import ConfigDict, Field

from common.database import BaseDocument


class User(BaseDocument):
    """
    Maps an internal user to their consent manager identity.

    Field names in MongoDB are camelCase (internalID, userIdentifier, ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    internal_id: str = Field(..., alias="internalID")
    user_identifier: Optional[str] = Field(None, alias="userIdentifier")
    email: Optional[str] = None
    consent_id: Optional[str] = Field(None, alias="consentID")

    class Settings:
        name = "users"
