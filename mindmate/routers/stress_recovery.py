"""
FastAPI router for stress recovery challenge endpoints.

Provides endpoints for challenge generation, progress and history.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils.responses import success_response
from mindmate.dependencies import get_challenge_service
from mindmate.pipelines import stress_recovery as pipelines
from mindmate.pipelines.identity import user_id_or_anonymous
from mindmate.schemas.stress_recovery import (
    ChallengeRequest,
    DayCompleteRequest,
    GenerateChallengeRequest,
    StartChallengeRequest,
    TaskProgressRequest,
)
from mindmate.services.challenges.challenge_service import ChallengeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stress-recovery", tags=["stress-recovery"])

ChallengeServiceDep = Annotated[ChallengeService, Depends(get_challenge_service)]


@router.post("/generate")
async def generate_challenge(body: GenerateChallengeRequest, challenge_service: ChallengeServiceDep):
    """
    Draft a 3-day recovery challenge from the user's recent history.

    Uses the AI provider when available, otherwise the data-driven catalog.
    """
    result = await pipelines.generate_challenge_pipeline(
        challenge_service=challenge_service,
        user_id=user_id_or_anonymous(body.userId),
        work_context=body.workContext,
        company_role=body.companyRole,
        google_fit=body.googleFitData,
    )
    return success_response(result)


@router.post("/start")
async def start_challenge(body: StartChallengeRequest, challenge_service: ChallengeServiceDep):
    result = await pipelines.start_challenge_pipeline(
        challenge_service=challenge_service,
        user_id=body.userId,
        challenge=body.challenge,
    )
    return success_response(result, message="Challenge started")


@router.post("/task-progress")
async def update_task_progress(body: TaskProgressRequest, challenge_service: ChallengeServiceDep):
    result = await pipelines.update_task_progress_pipeline(
        challenge_service=challenge_service,
        user_id=body.userId,
        challenge_id=body.challengeId,
        day_number=body.dayNumber,
        completed=body.completed,
        task_id=body.taskId,
        task_name=body.taskName,
    )
    return success_response(result)


@router.post("/day-complete")
async def complete_day(body: DayCompleteRequest, challenge_service: ChallengeServiceDep):
    """
    Mark a day complete.

    Completing the last open day completes the whole challenge.
    """
    result = await pipelines.complete_day_pipeline(
        challenge_service=challenge_service,
        user_id=body.userId,
        challenge_id=body.challengeId,
        day_number=body.dayNumber,
    )
    return success_response(result)


@router.post("/complete")
async def complete_challenge(body: ChallengeRequest, challenge_service: ChallengeServiceDep):
    result = await pipelines.complete_challenge_pipeline(
        challenge_service=challenge_service,
        user_id=body.userId,
        challenge_id=body.challengeId,
    )
    return success_response(result, message="Challenge completed")


@router.post("/discard")
async def discard_challenge(body: ChallengeRequest, challenge_service: ChallengeServiceDep):
    result = await pipelines.discard_challenge_pipeline(
        challenge_service=challenge_service,
        user_id=body.userId,
        challenge_id=body.challengeId,
    )
    return success_response(result)


@router.get("/active")
async def get_active_challenges(
    challenge_service: ChallengeServiceDep,
    userId: Optional[str] = Query(default=None),
):
    result = await pipelines.active_challenges_pipeline(challenge_service=challenge_service, user_id=userId)
    return success_response(result)


@router.get("/history")
async def get_challenge_history(
    challenge_service: ChallengeServiceDep,
    userId: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None),
):
    result = await pipelines.challenge_history_pipeline(
        challenge_service=challenge_service,
        user_id=userId,
        limit=limit,
    )
    return success_response(result)


@router.get("/dashboard")
async def get_challenge_dashboard(
    challenge_service: ChallengeServiceDep,
    userId: Optional[str] = Query(default=None),
):
    result = await pipelines.challenge_dashboard_pipeline(challenge_service=challenge_service, user_id=userId)
    return success_response(result)
