"""
Request schemas.
"""

from connector.schemas.auth import LoginRequest
from connector.schemas.consent import (
    ExportConsentRequest,
    ImportConsentRequest,
    UserLoginRequest,
    GiveConsentRequest,
)

__all__ = [
    "LoginRequest",
    "ExportConsentRequest",
    "ImportConsentRequest",
    "UserLoginRequest",
    "GiveConsentRequest",
]
