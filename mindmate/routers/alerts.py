"""
FastAPI router for stress alerts and the team alert stream.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from common.utils.responses import success_response
from mindmate.config import settings
from mindmate.dependencies import get_broadcaster, get_stress_alert_service
from mindmate.pipelines import alerts as pipelines
from mindmate.pipelines.identity import require_user_id, user_id_or_anonymous
from mindmate.schemas.alerts import StressCheckRequest, TeamAlertRequest
from mindmate.services.alerts.broadcaster import AlertBroadcaster
from mindmate.services.alerts.stress_alert_service import StressAlertService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["alerts"])
team_router = APIRouter(prefix="/team-alerts", tags=["alerts"])


@router.post("/stress-check")
async def stress_check(
    body: StressCheckRequest,
    stress_alert_service: Annotated[StressAlertService, Depends(get_stress_alert_service)],
    userId: Optional[str] = Query(default=None),
):
    """
    Score the user's current stress from mood history and fitness data.

    The result is cached as the user's last stress alert.
    """
    result = await pipelines.stress_check_pipeline(
        stress_alert_service=stress_alert_service,
        user_id=require_user_id(body.userId, userId),
        google_fit=body.googleFitData,
    )
    return success_response(result)


@team_router.get("/stream")
async def stream_team_alerts(
    broadcaster: Annotated[AlertBroadcaster, Depends(get_broadcaster)],
    userId: Optional[str] = Query(default=None),
    teamId: Optional[str] = Query(default=None),
    isAdmin: Optional[str] = Query(default=None),
):
    """
    Server-sent event stream of team alerts and challenge events.

    The first event is ``connected``; idle streams get keepalive comments.
    """
    subscription = pipelines.subscribe_pipeline(
        broadcaster=broadcaster,
        user_id=user_id_or_anonymous(userId),
        team_id=teamId,
        is_admin=(isAdmin or "").lower() in ("1", "true"),
    )

    return StreamingResponse(
        broadcaster.stream(subscription, keepalive_seconds=settings.SSE_KEEPALIVE_SECONDS),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-transform",
            "X-Accel-Buffering": "no",
        },
    )


@team_router.post("/alert")
async def publish_team_alert(
    body: TeamAlertRequest,
    broadcaster: Annotated[AlertBroadcaster, Depends(get_broadcaster)],
):
    result = pipelines.publish_team_alert_pipeline(
        broadcaster=broadcaster,
        team_id=body.teamId,
        message=body.message,
        level=body.level,
    )
    return success_response(result)
