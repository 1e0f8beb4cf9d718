"""
Consent connector application settings.

Extends the base settings with consent manager and connector configuration.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Connector-specific settings."""

    # ==========================================================================
    # Connector Identity
    # ==========================================================================
    # Public base URL of this connector (used to build callback URLs)
    CONNECTOR_ENDPOINT: str = "http://localhost:3000"

    # Participant credentials issued by the consent manager
    SERVICE_KEY: Optional[str] = None
    SECRET_KEY: Optional[str] = None

    # RSA private key used to unwrap signed consents (PEM text or file path)
    PRIVATE_KEY: Optional[str] = None
    PRIVATE_KEY_PATH: Optional[str] = None

    # ==========================================================================
    # External Services
    # ==========================================================================
    CONSENT_MANAGER_URI: str = "http://localhost:8887/v1"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    def get_missing_settings(self) -> list:
        errors = super().get_missing_settings()

        if not self.SERVICE_KEY or not self.SECRET_KEY:
            errors.append("SERVICE_KEY and SECRET_KEY are required for the consent manager")

        if not self.PRIVATE_KEY and not self.PRIVATE_KEY_PATH:
            errors.append("PRIVATE_KEY or PRIVATE_KEY_PATH is required to decrypt consents")

        return errors

    def load_private_key(self) -> Optional[str]:
        """Return the PEM private key, reading PRIVATE_KEY_PATH when set."""
        if self.PRIVATE_KEY:
            return self.PRIVATE_KEY.replace("\\n", "\n")

        if self.PRIVATE_KEY_PATH:
            with open(self.PRIVATE_KEY_PATH, "r", encoding="utf-8") as f:
                return f.read()

        return None


# Global settings instance
settings = Settings()
