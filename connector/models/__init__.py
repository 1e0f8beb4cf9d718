"""
Database document models.
"""

from connector.models.user import User

__all__ = ["User"]
