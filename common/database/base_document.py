"""
Beanie base document with creation and modification timestamps.
"""

import logging
from datetime import datetime, timezone
from beanie import Document
from pydantic import Field

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseDocument(Document):
    """Adds created_at/updated_at; updated_at is refreshed on every save."""

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    async def save(self, *args, **kwargs):
        self.updated_at = _utcnow()
        logger.debug(f"Saving {self.__class__.__name__} {self.id}")
        return await super().save(*args, **kwargs)
