"""
Deterministic challenge selection from mood history and fitness data.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from mindmate.services.challenges.catalog import (
    DEFAULT,
    HIGH_STRESS,
    HIGH_STRESS_LOW_MOOD,
    INCREASING_STRESS,
    LOW_ACTIVITY_OR_SLEEP,
    LOW_MOOD,
    ChallengeCatalog,
)
from mindmate.services.metrics.metrics_evaluator import to_number
from mindmate.services.metrics.mood_statistics import MoodStatistics, summarize_history

logger = logging.getLogger(__name__)


class ChallengeSelector:
    """
    Picks a catalog template by pattern priority.

    Used directly when the AI path is unavailable, and as the fallback of
    ChallengeGenerator.
    """

    HIGH_STRESS_THRESHOLD = 4
    LOW_MOOD_THRESHOLD = 2
    LOW_STEPS_THRESHOLD = 3000
    LOW_SLEEP_THRESHOLD = 6

    def __init__(self, catalog: Optional[ChallengeCatalog] = None):
        self._catalog = catalog or ChallengeCatalog()

    @classmethod
    def classify(cls, stats: MoodStatistics, fitness: Optional[Dict[str, Any]] = None) -> str:
        """
        Map statistics to a pattern name, first match wins.

        Fitness values that are missing or zero never trigger the
        low-activity pattern.
        """
        fitness = fitness or {}
        high_stress = stats.avg_stress >= cls.HIGH_STRESS_THRESHOLD
        low_mood = stats.avg_mood <= cls.LOW_MOOD_THRESHOLD

        if high_stress and low_mood:
            return HIGH_STRESS_LOW_MOOD
        if high_stress:
            return HIGH_STRESS
        if low_mood:
            return LOW_MOOD
        if stats.trend == "increasing":
            return INCREASING_STRESS

        steps = to_number(fitness.get("stepsToday"))
        sleep = to_number(fitness.get("sleepHours"))
        if (steps and steps < cls.LOW_STEPS_THRESHOLD) or (sleep and sleep < cls.LOW_SLEEP_THRESHOLD):
            return LOW_ACTIVITY_OR_SLEEP

        return DEFAULT

    def select_challenge(
        self,
        history: Sequence[Dict[str, Any]],
        fitness_context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Build a challenge draft without calling any AI provider.

        Args:
            history: Mood entries, oldest first (callers pass the last 30)
            fitness_context: Normalized fitness snapshot (stepsToday, sleepHours)

        Returns:
            Challenge draft with generatedBy, basedOnEntries and personalization
        """
        stats = summarize_history(history)
        if stats is None:
            challenge = self._catalog.get(DEFAULT)
            challenge["generatedBy"] = "Default"
            challenge["basedOnEntries"] = 0
            return challenge

        pattern = self.classify(stats, fitness_context)
        challenge = self._catalog.get(
            pattern,
            avg_stress=stats.avg_stress,
            avg_mood=stats.avg_mood,
            trend=stats.trend,
        )

        challenge["generatedBy"] = "DataDriven"
        challenge["basedOnEntries"] = stats.total_entries
        challenge["personalization"] = {
            "avgStress": round(stats.avg_stress, 1),
            "avgMood": round(stats.avg_mood, 1),
            "trend": stats.trend,
            "patternKey": pattern,
            **self._catalog.describe(pattern),
        }

        logger.info(f"Selected {pattern} challenge from {stats.total_entries} entries")
        return challenge
