"""
Standard API response helpers.

Provides consistent response formatting for success and error cases.

Example:
    from common.utils import restful_response, exception_response

    @router.get("/consent/me")
    async def get_my_consent(...):
        try:
            data = await consent_service.get_my_consents(user_key)
            return restful_response(200, data)
        except Exception as e:
            logger.error(f"Failed to fetch consents: {e}", exc_info=True)
            return exception_response(e)
"""

from typing import Any, Optional, Dict

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from common.utils.exceptions import UpstreamServiceException

GENERIC_ERROR_MESSAGE = "Internal server error"


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a {success: True, data, message} body; empty keys are omitted."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Build a {success: False, error: {message, code, details}} body."""
    error: Dict[str, Any] = {"message": message}
    if code:
        error["code"] = code
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


def restful_response(
    status_code: Optional[int],
    data: Any = None,
) -> JSONResponse:
    """
    Create the normalized {success, status, data} envelope.

    Args:
        status_code: HTTP status code; None is answered as 500
        data: Payload to place under "data"

    Returns:
        JSONResponse with the envelope as body
    """
    status_code = status_code or 500

    return JSONResponse(
        status_code=status_code,
        content={
            "success": status_code < 400,
            "status": status_code,
            "data": data,
        },
    )


def error_status_and_body(exc: Exception) -> tuple:
    """
    Extract the status code and body to forward for a failed call.

    Upstream answers are forwarded as-is, API exceptions use their detail,
    anything else becomes a generic 500.
    """
    if isinstance(exc, UpstreamServiceException) and exc.status_code:
        body = exc.body if exc.body is not None else {"message": exc.message}
        return exc.status_code, body

    if isinstance(exc, HTTPException):
        return exc.status_code, exc.detail

    return 500, {"message": GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"}


def exception_response(exc: Exception) -> JSONResponse:
    """Answer a failed request with the enveloped upstream status/body."""
    status_code, body = error_status_and_body(exc)
    return restful_response(status_code, body)
