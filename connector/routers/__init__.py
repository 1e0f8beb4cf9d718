"""
Connector API Routers.

All routers are imported here for easy access from api.py.
"""

from connector.routers.auth import router as auth_router
from connector.routers.private_consent import router as private_consent_router
from connector.routers.public_consent import router as public_consent_router
from connector.routers.template import router as template_router

__all__ = [
    "auth_router",
    "private_consent_router",
    "public_consent_router",
    "template_router",
]
