"""
Environment-driven base settings.

Values come from environment variables or a local .env file. The
connector subclasses this with its consent manager settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        CONSENT_MANAGER_URI: str = ""

    settings = Settings()
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """Database, token, server and CORS settings."""

    # ==========================================================================
    # Database
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "consent_connector"

    # ==========================================================================
    # Private route tokens
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ==========================================================================
    # Server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "*"  # comma-separated, or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def get_missing_settings(self) -> list:
        """Describe each required setting that is not configured."""
        errors = []
        if not self.JWT_SECRET:
            errors.append("JWT_SECRET is required to authenticate private routes")
        return errors

    def validate_required(self) -> None:
        """
        Raise when required settings are missing.

        Raises:
            ValueError: Listing every missing setting
        """
        errors = self.get_missing_settings()
        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
