"""
Stress Alert Service

Runs the scored stress check for a user and remembers the latest
assessment on their dashboard.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from common.database import DocumentStore
from mindmate.services.document_layout import dashboard_entry, mood_entries, validate_user_id
from mindmate.services.metrics.metrics_evaluator import MetricsEvaluator

logger = logging.getLogger(__name__)


class StressAlertService:
    """
    Combines the points-based score with the severity assessment.
    """

    def __init__(self, store: DocumentStore, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def check(self, user_id: str, google_fit: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Score today's stress level.

        Args:
            user_id: User to check
            google_fit: Optional biometric snapshot sent by the client

        Returns:
            Score fields (level, score, reasons, avgStress, avgMood,
            dataPoints) plus "assessment" and "timestamp"
        """
        validate_user_id(user_id)
        google_fit = google_fit or {}
        timestamp = self._clock().isoformat()

        async with self._store.transaction() as document:
            entries = list(mood_entries(document, user_id))
            score = MetricsEvaluator.score_stress(entries, google_fit)
            assessment = MetricsEvaluator.evaluate(entries, google_fit)

            dashboard_entry(document, user_id)["lastStressAlert"] = {
                **assessment.to_dict(),
                "level": score.level,
                "score": score.score,
                "timestamp": timestamp,
            }

        logger.info(
            f"Stress check for {user_id}: level={score.level}, score={score.score}, "
            f"severity={assessment.severity}"
        )

        return {
            **score.to_dict(),
            "assessment": assessment.to_dict(),
            "timestamp": timestamp,
        }
