"""
Mood services - entry validation and history storage.
"""

from mindmate.services.mood.mood_validator import MoodValidator
from mindmate.services.mood.mood_service import MoodService

__all__ = ["MoodValidator", "MoodService"]
