"""
Mood Service

Append-only mood history per user, mirrored into the dashboard block.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from common.database import DocumentStore
from common.utils.exceptions import ValidationException
from mindmate.services.document_layout import dashboard_entry, mood_entries, validate_user_id
from mindmate.services.mood.mood_validator import MoodValidator

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class MoodService:
    """
    Stores and reads mood entries.
    """

    def __init__(self, store: DocumentStore, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize MoodService.

        Args:
            store: Document store holding all application state
            clock: Returns the current UTC time
        """
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def add_entry(
        self,
        user_id: str,
        mood: int,
        stress: int,
        feeling: Optional[str] = None,
        context: Optional[str] = None,
        day_completed: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Append an entry and its dashboard copy.

        Returns:
            The user's full history after the append

        Raises:
            ValidationException: If mood/stress are missing or out of range
        """
        validate_user_id(user_id)
        is_valid, error = MoodValidator.validate({
            "mood": mood,
            "stress": stress,
            "feeling": feeling,
            "context": context,
        })
        if not is_valid:
            raise ValidationException(error, code="INVALID_MOOD_ENTRY")

        entry = {
            "mood": mood,
            "stress": stress,
            "feeling": feeling or "neutral",
            "context": context or "manual",
            "dayCompleted": day_completed,
            "timestamp": self._clock().isoformat(),
        }

        async with self._store.transaction() as document:
            entries = mood_entries(document, user_id, create=True)
            entries.append(entry)
            dashboard = dashboard_entry(document, user_id)
            dashboard.setdefault("moodEntries", []).append(dict(entry))
            history = list(entries)

        logger.info(f"Mood entry saved for {user_id} (mood={mood}, stress={stress})")
        return history

    async def get_recent(self, user_id: str, limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
        return (await self.get_history(user_id))[-limit:]

    async def get_history(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Full history, or the last ``limit`` entries, oldest first."""
        entries = list(mood_entries(await self._store.read(), user_id))
        if limit is not None:
            return entries[-limit:] if limit > 0 else []
        return entries

    async def clear(self, user_id: str) -> None:
        """Remove the user's mood history; dashboard copies are kept."""
        validate_user_id(user_id)
        async with self._store.transaction() as document:
            document[user_id] = []
        logger.info(f"All mood data cleared for user {user_id}")
