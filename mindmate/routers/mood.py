"""
FastAPI router for mood tracking endpoints.

Provides endpoints for mood entries and the written summary.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils.responses import success_response
from mindmate.dependencies import get_llm_service, get_mood_service
from mindmate.pipelines import mood as pipelines
from mindmate.pipelines.identity import require_user_id
from mindmate.schemas.mood import MoodEntryRequest, UserRequest
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.mood.mood_service import MoodService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mood", tags=["mood"])
summary_router = APIRouter(prefix="/summary", tags=["mood"])


@router.post("")
async def submit_mood(
    body: MoodEntryRequest,
    mood_service: Annotated[MoodService, Depends(get_mood_service)],
    userId: Optional[str] = Query(default=None),
):
    """
    Record a mood entry.

    Returns the stress detection result and the last 10 entries.
    """
    result = await pipelines.submit_mood_pipeline(
        mood_service=mood_service,
        user_id=require_user_id(body.userId, userId),
        mood=body.mood,
        stress=body.stress,
        feeling=body.feeling,
        context=body.context,
        day_completed=body.dayCompleted,
    )
    return success_response(result)


@router.get("")
async def get_moods(
    mood_service: Annotated[MoodService, Depends(get_mood_service)],
    userId: Optional[str] = Query(default=None),
):
    """Get the last 10 mood entries."""
    result = await pipelines.get_recent_moods_pipeline(
        mood_service=mood_service,
        user_id=require_user_id(userId),
    )
    return success_response(result)


@router.post("/clear")
async def clear_moods(
    body: UserRequest,
    mood_service: Annotated[MoodService, Depends(get_mood_service)],
    userId: Optional[str] = Query(default=None),
):
    result = await pipelines.clear_moods_pipeline(
        mood_service=mood_service,
        user_id=require_user_id(body.userId, userId),
    )
    return success_response(message=result["message"])


@summary_router.get("")
async def get_summary(
    mood_service: Annotated[MoodService, Depends(get_mood_service)],
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
    userId: Optional[str] = Query(default=None),
):
    """
    Summarize the last 10 mood entries.

    The written summary comes from the LLM when one is configured.
    """
    result = await pipelines.summary_pipeline(
        mood_service=mood_service,
        llm_service=llm_service,
        user_id=require_user_id(userId),
    )
    return success_response(result)
