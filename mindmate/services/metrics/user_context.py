"""
Per-request context for challenge and recommendation generation.

Bundles the mood statistics with the optional Google Fit snapshot and the
user's work setting, and renders the plain-text block used in AI prompts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from mindmate.services.metrics.metrics_evaluator import to_number
from mindmate.services.metrics.mood_statistics import MoodStatistics, summarize_history


def normalize_fitness(google_fit: Optional[Dict[str, Any]]) -> Dict[str, float]:
    """
    Map the client's Google Fit payload onto the fields the engine reads.

    Accepts either the raw panel keys (steps, sleep) or already normalized
    ones (stepsToday, sleepHours). Returns {} when nothing was sent.
    """
    if not google_fit:
        return {}

    def pick(*keys: str) -> float:
        for key in keys:
            number = to_number(google_fit.get(key))
            if number is not None:
                return number
        return 0.0

    return {
        "stepsToday": pick("stepsToday", "steps"),
        "sleepHours": pick("sleepHours", "sleep"),
        "activeMinutes": pick("activeMinutes"),
        "heartRate": pick("heartRate", "avgHeartRate"),
    }


@dataclass
class UserContext:
    stats: Optional[MoodStatistics]
    fitness: Dict[str, float] = field(default_factory=dict)
    work_context: str = "office"
    company_role: str = "general"

    @classmethod
    def build(
        cls,
        history: Sequence[Dict[str, Any]],
        google_fit: Optional[Dict[str, Any]] = None,
        work_context: Optional[str] = None,
        company_role: Optional[str] = None,
    ) -> "UserContext":
        return cls(
            stats=summarize_history(history),
            fitness=normalize_fitness(google_fit),
            work_context=work_context or "office",
            company_role=company_role or "general",
        )

    def describe(self) -> str:
        """Readable summary handed to the LLM ahead of the task instructions."""
        stats = self.stats
        avg_stress = f"{stats.avg_stress:.1f}" if stats else "3"
        avg_mood = f"{stats.avg_mood:.1f}" if stats else "3"
        latest_stress = _fmt(stats.latest_stress) if stats else "3"
        latest_mood = _fmt(stats.latest_mood) if stats else "3"

        lines = [
            "User context:",
            f"- Stress level: {avg_stress}/5 (latest: {latest_stress}/5)",
            f"- Mood: {avg_mood}/5 (latest: {latest_mood}/5)",
            f"- Stress trend: {stats.trend if stats else 'stable'}",
            f"- Work setting: {self.work_context}",
            f"- Historical entries: {stats.total_entries if stats else 0}",
        ]

        if self.fitness:
            lines.extend([
                f"- Steps today: {_fmt(self.fitness['stepsToday'])}",
                f"- Sleep: {_fmt(self.fitness['sleepHours'])}h",
                f"- Active minutes: {_fmt(self.fitness['activeMinutes'])}",
            ])

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "moodData": self.stats.to_dict() if self.stats else {},
            "googleFitData": dict(self.fitness),
            "workContext": self.work_context,
            "companyRole": self.company_role,
        }


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
