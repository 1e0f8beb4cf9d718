"""
Utilities - response envelopes, exceptions and URL helpers.
"""

from common.utils.responses import (
    success_response,
    error_response,
    restful_response,
    exception_response,
    error_status_and_body,
)
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotFoundException,
    UpstreamServiceException,
)
from common.utils.urls import url_checker

__all__ = [
    "success_response",
    "error_response",
    "restful_response",
    "exception_response",
    "error_status_and_body",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "UpstreamServiceException",
    "url_checker",
]
