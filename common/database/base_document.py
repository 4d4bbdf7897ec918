"""
Beanie documents shared by the storage layer.

BaseDocument adds created_at/updated_at timestamps. StateDocument holds the
whole application state as one keyed document, which is what the MongoDB
flavour of the document store reads and replaces.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from beanie import Document, Indexed
from pydantic import Field

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class BaseDocument(Document):
    """
    Base document with common fields.

    All documents extending this class will have:
    - created_at: Timestamp when document was created
    - updated_at: Timestamp when document was last modified
    """

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    async def save(self, *args, **kwargs):
        """Override save to automatically update updated_at timestamp."""
        self.updated_at = _utcnow()
        try:
            return await super().save(*args, **kwargs)
        except Exception as e:
            logger.error(f"Failed to save {self.__class__.__name__} {self.id}: {e}")
            raise


class StateDocument(BaseDocument):
    """Entire application state stored under a single key."""

    key: Indexed(str, unique=True)
    data: Dict[str, Any] = Field(default_factory=dict)

    class Settings:
        name = "app_state"
