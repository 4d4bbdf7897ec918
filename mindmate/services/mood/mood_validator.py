"""
Mood entry validation.

Validates mood entry values against allowed ranges.
"""

from typing import Any, Dict, Optional, Tuple


class MoodValidator:
    """
    Validates mood entry values against allowed ranges.
    """

    METRIC_RANGES: Dict[str, Tuple[int, int]] = {
        "mood": (0, 4),
        "stress": (0, 5),
    }

    MAX_TEXT_LENGTH = 200

    @classmethod
    def validate(cls, values: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Validate mood and stress are present integers within range.

        Returns:
            tuple of (is_valid, error_message)
        """
        for metric, (min_val, max_val) in cls.METRIC_RANGES.items():
            value = values.get(metric)

            if value is None:
                return False, f"Missing required field: {metric}"

            if isinstance(value, bool) or not isinstance(value, int):
                return False, f"Field '{metric}' must be an integer"

            if value < min_val or value > max_val:
                return False, f"Field '{metric}' must be between {min_val} and {max_val}"

        for field_name in ("feeling", "context"):
            text = values.get(field_name)
            if text is not None and len(str(text)) > cls.MAX_TEXT_LENGTH:
                return False, f"Field '{field_name}' cannot exceed {cls.MAX_TEXT_LENGTH} characters"

        return True, None
