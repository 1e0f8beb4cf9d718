"""
Exceptions raised by the connector's pipelines and HTTP clients.

APIException carries a {message, code, details} detail so routers can
forward it as the response payload. UpstreamServiceException wraps a
failed call to the consent manager or a data provider.

Example:
    from common.utils import NotFoundException

    user = await User.find_one({"internalID": user_id})
    if not user:
        raise NotFoundException("User not found", code="USER_NOT_FOUND")
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """HTTPException whose detail is a machine-readable error payload."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status to answer with
            message: Human-readable error message
            code: Machine-readable error code (e.g. "USER_NOT_FOUND")
            details: Extra context placed under "details"
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}
        if code:
            detail["code"] = code
        if details is not None:
            detail["details"] = details

        self.message = message
        self.code = code
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class UnauthorizedException(APIException):
    """401 - missing, malformed or rejected credentials."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED", details: Optional[Any] = None):
        super().__init__(401, message, code, details)


class NotFoundException(APIException):
    """404 - the user or resource does not exist."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND", details: Optional[Any] = None):
        super().__init__(404, message, code, details)


class UpstreamServiceException(Exception):
    """
    A remote service answered with an error or could not be reached.

    status_code and body hold the remote answer when there was one;
    both are None for transport failures (timeouts, refused connections).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
