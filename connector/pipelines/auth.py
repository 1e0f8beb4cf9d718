"""
Authentication pipeline functions.

Issues access tokens for the private routes to holders of the
connector's service credentials.
"""

import logging
import secrets
from typing import Any, Dict, Optional

from common.auth import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


async def login_pipeline(
    auth: AuthProvider,
    expected_service_key: Optional[str],
    expected_secret_key: Optional[str],
    service_key: str,
    secret_key: str,
) -> Dict[str, Any]:
    """
    Exchange service credentials for an access token.

    Raises:
        UnauthorizedException: Credentials missing from configuration or wrong
    """
    if not expected_service_key or not expected_secret_key:
        logger.error("Login attempted but SERVICE_KEY/SECRET_KEY are not configured")
        raise UnauthorizedException("Invalid credentials", code="LOGIN_FAILED")

    valid_service = secrets.compare_digest(service_key, expected_service_key)
    valid_secret = secrets.compare_digest(secret_key, expected_secret_key)

    if not (valid_service and valid_secret):
        logger.warning("Login failed - invalid service credentials")
        raise UnauthorizedException("Invalid credentials", code="LOGIN_FAILED")

    token = await auth.create_token(service_key)
    logger.info("Access token issued")

    return {"token": token}
