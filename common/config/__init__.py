"""
Config - pydantic-settings base class shared by the connector settings.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
