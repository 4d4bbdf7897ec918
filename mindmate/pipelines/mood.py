"""
Mood tracking pipeline functions.

Stateless orchestration logic for mood entries and summaries.
"""

import logging
from typing import Any, Dict, Optional

from mindmate.services.ai.llm_service import LLMService
from mindmate.services.metrics.metrics_evaluator import MetricsEvaluator
from mindmate.services.metrics.mood_statistics import summarize_recent
from mindmate.services.mood.mood_service import MoodService

logger = logging.getLogger(__name__)

RECENT_ENTRIES = 10
SUMMARY_ENTRIES = 10


async def submit_mood_pipeline(
    mood_service: MoodService,
    user_id: str,
    mood: int,
    stress: int,
    feeling: Optional[str] = None,
    context: Optional[str] = None,
    day_completed: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Store a mood entry and run the quick stress trigger check.

    Returns:
        dict with detection result and the last 10 entries
    """
    history = await mood_service.add_entry(
        user_id,
        mood=mood,
        stress=stress,
        feeling=feeling,
        context=context,
        day_completed=day_completed,
    )

    detection = MetricsEvaluator.detect_stress(history)
    if detection.triggered:
        logger.info(f"Stress trigger for {user_id}: {detection.reason}")

    return {
        "detection": detection.to_dict(),
        "entries": history[-RECENT_ENTRIES:],
    }


async def get_recent_moods_pipeline(mood_service: MoodService, user_id: str) -> Dict[str, Any]:
    return {"entries": await mood_service.get_recent(user_id, RECENT_ENTRIES)}


async def clear_moods_pipeline(mood_service: MoodService, user_id: str) -> Dict[str, Any]:
    await mood_service.clear(user_id)
    return {"message": "All data cleared successfully"}


async def summary_pipeline(
    mood_service: MoodService,
    llm_service: LLMService,
    user_id: str,
) -> Dict[str, Any]:
    """
    Written 4-part summary plus statistics over the last 10 entries.
    """
    entries = await mood_service.get_recent(user_id, SUMMARY_ENTRIES)
    logger.info(f"Summary for {user_id} using {len(entries)} entries")

    stats = summarize_recent(entries)
    summary = await llm_service.generate_summary(entries)

    return {
        "summary": summary,
        "entriesAnalyzed": len(entries),
        "stats": stats.to_dict(),
    }
