"""
Accessors for the shared application document.

Layout:
    {
        "<userId>": [MoodEntry, ...],
        "dashboardData": {"<userId>": {"completedChallenges": [...], "moodEntries": [...]}},
        "challenges": {"<userId>": [ChallengeInstance, ...]},
    }
"""

from typing import Any, Dict, List

from common.utils.exceptions import ValidationException

DASHBOARD_KEY = "dashboardData"
CHALLENGES_KEY = "challenges"
RESERVED_KEYS = (DASHBOARD_KEY, CHALLENGES_KEY)


def validate_user_id(user_id: str) -> str:
    """
    Reject ids that would collide with the document's own sections.

    Raises:
        ValidationException: If the id is empty or reserved
    """
    if not user_id:
        raise ValidationException("userId required", code="USER_ID_REQUIRED")
    if user_id in RESERVED_KEYS:
        raise ValidationException(
            f"'{user_id}' cannot be used as a userId",
            code="RESERVED_USER_ID",
        )
    return user_id


def mood_entries(document: Dict[str, Any], user_id: str, create: bool = False) -> List[Dict[str, Any]]:
    """Mood history list for a user; created in place when ``create`` is set."""
    entries = document.get(user_id)
    if isinstance(entries, list):
        return entries
    if create:
        document[user_id] = []
        return document[user_id]
    return []


def dashboard_entry(document: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Per-user dashboard block, created in place if missing."""
    dashboard = document.setdefault(DASHBOARD_KEY, {})
    entry = dashboard.setdefault(user_id, {})
    entry.setdefault("completedChallenges", [])
    return entry


def user_challenges(document: Dict[str, Any], user_id: str, create: bool = False) -> List[Dict[str, Any]]:
    """Challenge instances for a user, oldest first."""
    if create:
        return document.setdefault(CHALLENGES_KEY, {}).setdefault(user_id, [])
    return document.get(CHALLENGES_KEY, {}).get(user_id, [])
