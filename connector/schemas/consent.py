"""
Pydantic models for consent request bodies.

Fields are optional; handlers check presence themselves so that
missing values are answered with a 400 payload instead of a 422.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class ExportConsentRequest(BaseModel):
    """Body sent by the consent manager when a consent is exported to us."""
    signedConsent: Optional[Dict[str, Any]] = None
    encrypted: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.signedConsent and self.encrypted)


class ImportConsentRequest(BaseModel):
    """Body to forward a signed consent to a data provider."""
    dataProviderEndpoint: Optional[str] = None
    signedConsent: Optional[Dict[str, Any]] = None
    encrypted: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.dataProviderEndpoint and self.signedConsent and self.encrypted)


class UserLoginRequest(BaseModel):
    """Consent manager user credentials."""
    email: Optional[str] = None
    password: Optional[str] = None


class GiveConsentRequest(BaseModel):
    """Give-consent body; forwarded as-is to the consent manager."""
    model_config = ConfigDict(extra="allow")

    privacyNotice: Optional[str] = None
