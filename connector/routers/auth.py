"""
Authentication Router.

Exchanges the connector's service credentials for a private-route token.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.auth import AuthProvider
from common.utils import restful_response, exception_response
from connector.config import Settings
from connector.dependencies import get_auth_provider, get_settings
from connector.pipelines.auth import login_pipeline
from connector.schemas.auth import LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
    app_settings: Annotated[Settings, Depends(get_settings)],
):
    """Authenticate with serviceKey/secretKey and return an access token."""
    try:
        result = await login_pipeline(
            auth,
            expected_service_key=app_settings.SERVICE_KEY,
            expected_secret_key=app_settings.SECRET_KEY,
            service_key=body.serviceKey,
            secret_key=body.secretKey,
        )
        return restful_response(200, result)
    except Exception as e:
        logger.error(f"login failed: {e}", exc_info=True)
        return exception_response(e)
