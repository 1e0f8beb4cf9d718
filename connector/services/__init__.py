"""
Connector Services.

HTTP clients for the consent manager and remote data providers.
"""

from connector.services.consent.consent_service import ConsentService
from connector.services.consent.decryption import SignedConsentDecryptor
from connector.services.exchange.data_request_service import DataRequestService

__all__ = [
    "ConsentService",
    "SignedConsentDecryptor",
    "DataRequestService",
]
