"""
FastAPI authentication dependencies.

Provides a factory to create auth dependencies that can be injected
into route handlers. Works with any AuthProvider implementation.

Example:
    from common.auth import JWTAuth, create_auth_dependency

    auth = JWTAuth(secret="your-secret")
    require_auth = create_auth_dependency(lambda: auth)

    @router.get("/private/consent/me")
    async def get_my_consent(subject: str = Depends(require_auth)):
        ...
"""

import logging
from typing import Callable, Optional
from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: Callable that returns the AuthProvider instance
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency function that returns the token subject
    """

    async def get_current_subject(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> str:
        """
        Extract and verify the token subject from the authorization header.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        if not authorization:
            raise UnauthorizedException(
                "Missing authorization header", code="UNAUTHORIZED"
            )

        prefix = f"{scheme} "
        if not authorization.startswith(prefix):
            raise UnauthorizedException(
                f"Invalid authorization scheme. Expected: {scheme}",
                code="INVALID_AUTH_SCHEME",
            )

        token = authorization[len(prefix):]
        if not token:
            raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")

        auth = get_auth_provider()
        try:
            payload = await auth.verify_token(token)
        except ValueError as e:
            logger.warning(f"Rejected token: {e}")
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        subject = payload.get("sub")
        if not subject:
            raise UnauthorizedException("Token missing subject", code="INVALID_TOKEN")

        return subject

    return get_current_subject
