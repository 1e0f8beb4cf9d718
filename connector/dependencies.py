"""
FastAPI dependencies for the consent connector.

Holds the service singletons created at startup and exposes them
to the routers through dependency injection.
"""

import logging
from typing import Optional

import httpx

from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils.exceptions import APIException
from connector.config import Settings, settings
from connector.services.consent.consent_service import ConsentService
from connector.services.consent.decryption import SignedConsentDecryptor
from connector.services.exchange.data_request_service import DataRequestService

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_auth_provider: Optional[AuthProvider] = None
_consent_service: Optional[ConsentService] = None
_data_request_service: Optional[DataRequestService] = None
_decryptor: Optional[SignedConsentDecryptor] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def init_all_services(
    app_settings: Settings = settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """
    Initialize all connector services.

    Args:
        app_settings: Settings to build services from
        transport: Optional httpx transport shared by the HTTP clients
    """
    global _auth_provider, _consent_service, _data_request_service, _decryptor

    if app_settings.JWT_SECRET:
        _auth_provider = JWTAuth(
            secret=app_settings.JWT_SECRET,
            algorithm=app_settings.JWT_ALGORITHM,
            access_token_expire_minutes=app_settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        )
    else:
        logger.warning("JWT_SECRET not set, private routes are unavailable")

    _consent_service = ConsentService(
        base_url=app_settings.CONSENT_MANAGER_URI,
        service_key=app_settings.SERVICE_KEY,
        secret_key=app_settings.SECRET_KEY,
        timeout=app_settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )

    _data_request_service = DataRequestService(
        timeout=app_settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )

    private_key = app_settings.load_private_key()
    if private_key:
        _decryptor = SignedConsentDecryptor(private_key)
    else:
        logger.warning("No private key configured, exported consents cannot be decrypted")

    logger.info("Connector services initialized")


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_settings() -> Settings:
    return settings


def get_auth_provider() -> AuthProvider:
    if _auth_provider is None:
        logger.error("Private route called but JWT_SECRET is not configured")
        raise APIException(
            503,
            "Authentication is not configured",
            code="AUTH_NOT_CONFIGURED",
        )
    return _auth_provider


def get_consent_service() -> ConsentService:
    if _consent_service is None:
        raise RuntimeError("ConsentService not initialized")
    return _consent_service


def get_data_request_service() -> DataRequestService:
    if _data_request_service is None:
        raise RuntimeError("DataRequestService not initialized")
    return _data_request_service


def get_decryptor() -> Optional[SignedConsentDecryptor]:
    """The consent decryptor, or None when no private key is configured."""
    return _decryptor


# Bearer JWT check for the private routes; returns the token subject
require_auth = create_auth_dependency(get_auth_provider)
