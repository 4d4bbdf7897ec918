"""
Stress evaluation over recent mood entries.

Pure rule checks: no I/O, no clock. Everything here takes the entries and
fitness numbers it needs as arguments so results are reproducible.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a stored metric to a float.

    Returns None for anything that is not a finite number, including
    booleans, missing values and unparseable strings.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def numeric_values(entries: Sequence[Dict[str, Any]], key: str) -> List[float]:
    """Collect the numeric values of ``key``, skipping entries where it is not a number."""
    values = []
    for entry in entries:
        number = to_number(entry.get(key))
        if number is not None:
            values.append(number)
    return values


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _first_positive(source: Dict[str, Any], *keys: str) -> float:
    for key in keys:
        number = to_number(source.get(key))
        if number:
            return number
    return 0.0


@dataclass
class StressAssessment:
    """Severity classification derived from recent entries and fitness data."""
    severity: str
    avg_stress: float
    avg_mood: float
    heart_points: float
    resting_hr: float
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "avgStress": self.avg_stress,
            "avgMood": self.avg_mood,
            "heartPoints": self.heart_points,
            "restingHR": self.resting_hr,
            "reasons": list(self.reasons),
        }


@dataclass
class StressDetection:
    """Result of the quick trigger check run after each mood entry."""
    triggered: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"triggered": self.triggered, "reason": self.reason}


@dataclass
class StressScore:
    """Points-based stress level used by the stress-check alert."""
    level: str
    score: int
    reasons: List[str]
    avg_stress: float
    avg_mood: float
    entries_used: int
    fitness_fields: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "score": self.score,
            "reasons": list(self.reasons),
            "avgStress": self.avg_stress,
            "avgMood": self.avg_mood,
            "dataPoints": {
                "entries": self.entries_used,
                "googleFit": self.fitness_fields,
            },
        }


class MetricsEvaluator:
    """
    Rule-based stress checks over mood entries and Google Fit numbers.
    """

    SEVERITY_LEVELS = ("none", "low", "moderate", "high", "very_high")

    EVALUATION_WINDOW = 12
    SPIKE_WINDOW = 3
    SPIKE_STRESS = 4
    SPIKE_COUNT = 2
    MOOD_SWING_WINDOW = 4
    MOOD_SWING = 2
    SCORE_WINDOW = 7

    @classmethod
    def severity_rank(cls, severity: str) -> int:
        """Position of a severity tier, 0 for "none" up to 4 for "very_high"."""
        return cls.SEVERITY_LEVELS.index(severity)

    @classmethod
    def evaluate(
        cls,
        entries: Sequence[Dict[str, Any]],
        fitness: Optional[Dict[str, Any]] = None,
    ) -> StressAssessment:
        """
        Classify stress severity from the last 12 entries.

        Args:
            entries: Mood entries, oldest first
            fitness: Optional snapshot with heartPoints / restingHeartRate
                (heartPointsTotal / restingHeartRateAvg are accepted too)

        Returns:
            StressAssessment with severity tier and human-readable reasons
        """
        fitness = fitness or {}
        window = list(entries)[-cls.EVALUATION_WINDOW:]

        avg_stress = round(mean(numeric_values(window, "stress")), 2)
        avg_mood = round(mean(numeric_values(window, "mood")), 2)
        heart_points = _first_positive(fitness, "heartPoints", "heartPointsTotal")
        resting_hr = _first_positive(fitness, "restingHeartRate", "restingHeartRateAvg")

        # Reason thresholds intentionally differ from the severity ladder below
        reasons = []
        if avg_stress >= 4:
            reasons.append(f"Average stress is high ({_fmt(avg_stress)})")
        elif avg_stress >= 3.5:
            reasons.append(f"Average stress is elevated ({_fmt(avg_stress)})")
        if resting_hr >= 95:
            reasons.append(f"Resting heart rate is high ({_fmt(resting_hr)})")
        if heart_points == 0:
            reasons.append("No heart points detected recently")

        if avg_stress >= 4 or resting_hr >= 95:
            severity = "very_high"
        elif avg_stress >= 3.5 or resting_hr >= 90:
            severity = "high"
        elif avg_stress >= 2.5:
            severity = "moderate"
        elif avg_stress >= 1.5:
            severity = "low"
        else:
            severity = "none"

        return StressAssessment(
            severity=severity,
            avg_stress=avg_stress,
            avg_mood=avg_mood,
            heart_points=heart_points,
            resting_hr=resting_hr,
            reasons=reasons,
        )

    @classmethod
    def detect_stress(cls, entries: Sequence[Dict[str, Any]]) -> StressDetection:
        """
        Quick trigger check, first matching rule wins.

        1. At least 2 of the last 3 entries have stress >= 4.
        2. With 4 or more entries, mood over the last 4 spans 2 or more points.
        """
        entries = list(entries)
        if not entries:
            return StressDetection(triggered=False)

        last_three = entries[-cls.SPIKE_WINDOW:]
        spikes = [s for s in numeric_values(last_three, "stress") if s >= cls.SPIKE_STRESS]
        if len(spikes) >= cls.SPIKE_COUNT:
            return StressDetection(triggered=True, reason="recent stress spikes")

        if len(entries) >= cls.MOOD_SWING_WINDOW:
            moods = numeric_values(entries[-cls.MOOD_SWING_WINDOW:], "mood")
            if moods and max(moods) - min(moods) >= cls.MOOD_SWING:
                return StressDetection(triggered=True, reason="mood drop detected")

        return StressDetection(triggered=False)

    @classmethod
    def score_stress(
        cls,
        entries: Sequence[Dict[str, Any]],
        fitness: Optional[Dict[str, Any]] = None,
    ) -> StressScore:
        """
        Points-based stress level over the last 7 entries.

        Mood decline, stress and mood averages, heart rate and step count add
        points; recorded heart minutes take 8 off. 55+ is very_high, 40+ high,
        25+ moderate, anything else low.
        """
        fitness = fitness or {}
        entries = list(entries)
        if not entries:
            return StressScore(
                level="low", score=0, reasons=[], avg_stress=0.0, avg_mood=0.0,
                entries_used=0, fitness_fields=len(fitness),
            )

        recent = entries[-cls.SCORE_WINDOW:]
        avg_mood = mean([to_number(e.get("mood")) or 0.0 for e in recent])
        avg_stress = mean([to_number(e.get("stress")) or 0.0 for e in recent])

        reasons: List[str] = []
        score = 0

        if len(recent) >= 3:
            first = to_number(recent[-3].get("mood")) or 0.0
            last = to_number(recent[-1].get("mood")) or 0.0
            if last - first < -1:
                reasons.append("Mood trending downward")
                score += 15

        if avg_stress >= 4:
            reasons.append(f"High avg stress: {avg_stress:.1f}/5")
            score += 30
        elif avg_stress >= 3:
            reasons.append(f"Moderate stress: {avg_stress:.1f}/5")
            score += 18
        elif avg_stress >= 2:
            reasons.append(f"Mild stress: {avg_stress:.1f}/5")
            score += 8

        if avg_mood <= 0.5:
            reasons.append(f"Very low mood: {avg_mood:.1f}/4")
            score += 25
        elif avg_mood <= 1.5:
            reasons.append(f"Low mood: {avg_mood:.1f}/4")
            score += 12

        if fitness:
            resting_hr = _first_positive(fitness, "restingHeartRate", "restingHR")
            avg_hr = to_number(fitness.get("avgHeartRate")) or 0.0
            steps = to_number(fitness.get("stepsToday")) or to_number(fitness.get("steps"))
            heart_minutes = to_number(fitness.get("heartMinutes")) or 0.0

            if resting_hr > 95:
                reasons.append(f"Elevated RHR: {_fmt(resting_hr)} bpm (resting)")
                score += 20
            elif resting_hr > 85:
                reasons.append(f"Slightly elevated RHR: {_fmt(resting_hr)} bpm")
                score += 8

            if avg_hr > 110:
                reasons.append(f"High avg heart rate: {_fmt(avg_hr)} bpm")
                score += 12

            if steps is not None and steps < 3000:
                reasons.append(f"Very low activity: {_fmt(steps)} steps today")
                score += 8
            elif steps is not None and steps < 5000:
                reasons.append(f"Low activity: {_fmt(steps)} steps today")
                score += 4

            if heart_minutes > 0:
                score = max(0, score - 8)

        if score >= 55:
            level = "very_high"
        elif score >= 40:
            level = "high"
        elif score >= 25:
            level = "moderate"
        else:
            level = "low"

        return StressScore(
            level=level,
            score=score,
            reasons=reasons,
            avg_stress=round(avg_stress, 2),
            avg_mood=round(avg_mood, 2),
            entries_used=len(recent),
            fitness_fields=len(fitness),
        )


def _fmt(value: float) -> str:
    """Render whole numbers without a trailing .0."""
    return str(int(value)) if float(value).is_integer() else str(value)
