"""
Token provider interface used by the auth dependency.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """Issues and verifies the bearer tokens of the private routes."""

    @abstractmethod
    async def create_token(self, subject: str, **claims: Any) -> str:
        """Issue a token for subject, with optional extra claims."""

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Decode a token.

        Returns:
            The token claims; "sub" is always present

        Raises:
            ValueError: If the token is invalid or expired
        """
