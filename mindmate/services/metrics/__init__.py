"""
Metrics services - stress evaluation and mood statistics.
"""

from mindmate.services.metrics.metrics_evaluator import (
    MetricsEvaluator,
    StressAssessment,
    StressDetection,
    StressScore,
)
from mindmate.services.metrics.mood_statistics import (
    MoodStatistics,
    SummaryStatistics,
    compute_trend,
    summarize_history,
    summarize_recent,
)
from mindmate.services.metrics.user_context import UserContext, normalize_fitness

__all__ = [
    "MetricsEvaluator",
    "StressAssessment",
    "StressDetection",
    "StressScore",
    "MoodStatistics",
    "SummaryStatistics",
    "compute_trend",
    "summarize_history",
    "summarize_recent",
    "UserContext",
    "normalize_fitness",
]
