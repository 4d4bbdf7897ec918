"""
Derived statistics over a user's mood history.

Feeds the challenge selector, the AI prompts and the summary endpoint.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from mindmate.services.metrics.metrics_evaluator import mean, to_number

TREND_RECENT_WINDOW = 5
TREND_OLDER_START = -15
TREND_OLDER_END = -10


def compute_trend(stress_levels: Sequence[float]) -> str:
    """
    Compare the last 5 stress values with the window 15 to 10 entries back.

    Returns "increasing" when the recent mean is higher, "decreasing"
    otherwise. With 10 or fewer values the older window is empty and the
    trend is "stable". A partial older window is averaged over what it holds.
    """
    levels = list(stress_levels)
    recent = levels[-TREND_RECENT_WINDOW:]
    older = levels[TREND_OLDER_START:TREND_OLDER_END]

    if not recent or not older:
        return "stable"

    return "increasing" if mean(recent) > mean(older) else "decreasing"


@dataclass
class MoodStatistics:
    """Aggregates over the mood window handed to the challenge engine."""
    avg_stress: float
    avg_mood: float
    max_stress: float
    min_mood: float
    latest_mood: float
    latest_stress: float
    total_entries: int
    trend: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avgMood": round(self.avg_mood, 1),
            "avgStress": round(self.avg_stress, 1),
            "maxStress": self.max_stress,
            "minMood": self.min_mood,
            "latestMood": self.latest_mood,
            "latestStress": self.latest_stress,
            "totalEntries": self.total_entries,
            "trend": self.trend,
        }


def summarize_history(history: Sequence[Dict[str, Any]]) -> Optional[MoodStatistics]:
    """
    Compute averages, extremes and trend.

    Missing or non-numeric values count as 0. Returns None for an empty
    history so callers never divide by zero.
    """
    history = list(history)
    if not history:
        return None

    stress_levels = [to_number(e.get("stress")) or 0.0 for e in history]
    mood_levels = [to_number(e.get("mood")) or 0.0 for e in history]

    return MoodStatistics(
        avg_stress=mean(stress_levels),
        avg_mood=mean(mood_levels),
        max_stress=max(stress_levels),
        min_mood=min(mood_levels),
        latest_mood=mood_levels[-1],
        latest_stress=stress_levels[-1],
        total_entries=len(history),
        trend=compute_trend(stress_levels),
    )


@dataclass
class SummaryStatistics:
    """Stats shown next to the written summary."""
    entries_count: int
    avg_mood: float
    avg_stress: float
    max_stress: float
    min_mood: float
    max_mood: float
    mood_distribution: Dict[str, int] = field(default_factory=dict)
    trend_direction: str = "stable"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entriesCount": self.entries_count,
            "avgMood": self.avg_mood,
            "avgStress": self.avg_stress,
            "maxStress": self.max_stress,
            "minMood": self.min_mood,
            "maxMood": self.max_mood,
            "moodDistribution": dict(self.mood_distribution),
            "trendDirection": self.trend_direction,
        }


def summarize_recent(entries: Sequence[Dict[str, Any]]) -> SummaryStatistics:
    """Stats for the summary panel; mood is bucketed into 0..4."""
    moods = [to_number(e.get("mood")) for e in entries]
    moods = [m for m in moods if m is not None]
    stresses = [s for s in (to_number(e.get("stress")) for e in entries) if s is not None]

    distribution = {str(level): 0 for level in range(5)}
    for m in moods:
        key = str(int(m))
        if key in distribution:
            distribution[key] += 1

    if len(moods) > 1:
        trend_direction = "improving" if moods[-1] > moods[0] else "declining"
    else:
        trend_direction = "stable"

    return SummaryStatistics(
        entries_count=len(entries),
        avg_mood=round(mean(moods), 2),
        avg_stress=round(mean(stresses), 2),
        max_stress=max(stresses) if stresses else 0,
        min_mood=min(moods) if moods else 0,
        max_mood=max(moods) if moods else 0,
        mood_distribution=distribution,
        trend_direction=trend_direction,
    )
