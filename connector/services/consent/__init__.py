"""
Consent manager client and signed consent decryption.
"""

from connector.services.consent.consent_service import ConsentService
from connector.services.consent.decryption import SignedConsentDecryptor

__all__ = ["ConsentService", "SignedConsentDecryptor"]
