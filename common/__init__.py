"""
Common library for reusable infrastructure components.

This package provides generic modules that the connector builds on:

- database: Async MongoDB connection with Beanie ODM
- auth: JWT authentication and FastAPI dependencies
- utils: Standard responses, exceptions, URL helpers
- config: Base settings class
"""

from common.database import MongoDB, BaseDocument
from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils import (
    success_response,
    error_response,
    restful_response,
    exception_response,
    url_checker,
    APIException,
    UnauthorizedException,
    NotFoundException,
    UpstreamServiceException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    "BaseDocument",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "create_auth_dependency",
    # Utils
    "success_response",
    "error_response",
    "restful_response",
    "exception_response",
    "url_checker",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "UpstreamServiceException",
    # Config
    "BaseAppSettings",
]
