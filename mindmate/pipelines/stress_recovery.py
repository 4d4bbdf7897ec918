"""
Stress recovery challenge pipeline functions.

Stateless orchestration logic for challenge generation and progress.
"""

import logging
from typing import Any, Dict, Optional

from common.utils.exceptions import ValidationException
from mindmate.services.challenges.challenge_service import ChallengeService

logger = logging.getLogger(__name__)


def _require_challenge_id(challenge_id: Optional[str]) -> str:
    if not challenge_id:
        raise ValidationException("userId and challengeId required", code="CHALLENGE_ID_REQUIRED")
    return challenge_id


async def generate_challenge_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    work_context: Optional[str] = None,
    company_role: Optional[str] = None,
    google_fit: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    challenge = await challenge_service.generate(
        user_id,
        work_context=work_context,
        company_role=company_role,
        google_fit=google_fit,
    )
    logger.info(f"Challenge drafted for {user_id} ({challenge.get('generatedBy')})")
    return {"challenge": challenge}


async def start_challenge_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    challenge: Dict[str, Any],
) -> Dict[str, Any]:
    instance = await challenge_service.start(user_id, challenge)
    return {"challengeId": instance["id"], "challenge": instance}


async def update_task_progress_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    challenge_id: Optional[str],
    day_number: int,
    completed: bool,
    task_id: Optional[str] = None,
    task_name: Optional[str] = None,
) -> Dict[str, Any]:
    task = await challenge_service.update_task_progress(
        user_id,
        _require_challenge_id(challenge_id),
        day_number,
        completed,
        task_id=task_id,
        task_name=task_name,
    )
    return {"task": task}


async def complete_day_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    challenge_id: Optional[str],
    day_number: int,
) -> Dict[str, Any]:
    return await challenge_service.complete_day(user_id, _require_challenge_id(challenge_id), day_number)


async def complete_challenge_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    challenge_id: Optional[str],
) -> Dict[str, Any]:
    challenge = await challenge_service.complete_challenge(user_id, _require_challenge_id(challenge_id))
    return {"challenge": challenge}


async def discard_challenge_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    challenge_id: Optional[str],
) -> Dict[str, Any]:
    challenge = await challenge_service.discard_challenge(user_id, _require_challenge_id(challenge_id))
    return {"challenge": challenge, "message": "Challenge discarded"}


async def active_challenges_pipeline(challenge_service: ChallengeService, user_id: str) -> Dict[str, Any]:
    return await challenge_service.list_active(user_id)


async def challenge_history_pipeline(
    challenge_service: ChallengeService,
    user_id: str,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    return {"challenges": await challenge_service.list_history(user_id, limit)}


async def challenge_dashboard_pipeline(challenge_service: ChallengeService, user_id: str) -> Dict[str, Any]:
    return await challenge_service.dashboard(user_id)
