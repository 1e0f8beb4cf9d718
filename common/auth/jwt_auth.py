"""
JWT authentication provider.

Issues and verifies stateless access tokens for the connector's
private routes.

Example:
    auth = JWTAuth(
        secret="your-secret-key",
        access_token_expire_minutes=60,
    )

    token = await auth.create_token("service-key")
    claims = await auth.verify_token(token)
    print(claims["sub"])  # service-key
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, JWTError

from common.auth.base import AuthProvider


class JWTAuth(AuthProvider):
    """JWT authentication provider backed by python-jose."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Token expiration time
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")

        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

    async def create_token(
        self,
        subject: str,
        **claims: Any,
    ) -> str:
        """Create a signed JWT for the subject."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "exp": now + self.access_token_expire,
            "iat": now,
            **claims,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode a JWT."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")
