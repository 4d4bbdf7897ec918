"""
Alert pipeline functions.

Stress checks and team alert broadcasting.
"""

import logging
import time
from typing import Any, Dict, Optional

from mindmate.services.alerts.broadcaster import AlertBroadcaster, Subscription
from mindmate.services.alerts.stress_alert_service import StressAlertService

logger = logging.getLogger(__name__)

TEAM_ALERT_CHANNEL = "team-alert"


async def stress_check_pipeline(
    stress_alert_service: StressAlertService,
    user_id: str,
    google_fit: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return await stress_alert_service.check(user_id, google_fit)


def subscribe_pipeline(
    broadcaster: AlertBroadcaster,
    user_id: str,
    team_id: Optional[str] = None,
    is_admin: bool = False,
) -> Subscription:
    return broadcaster.subscribe({"userId": user_id, "teamId": team_id, "isAdmin": is_admin})


def publish_team_alert_pipeline(
    broadcaster: AlertBroadcaster,
    team_id: str,
    message: str,
    level: str = "info",
) -> Dict[str, Any]:
    """
    Deliver an alert to the team's members, admins and team-less clients.
    """
    payload = {
        "teamId": team_id,
        "message": message,
        "level": level,
        "timestamp": int(time.time() * 1000),
    }

    def for_team(meta: Dict[str, Any]) -> bool:
        return bool(meta) and (meta.get("teamId") == team_id or bool(meta.get("isAdmin")) or not meta.get("teamId"))

    delivered = broadcaster.publish(TEAM_ALERT_CHANNEL, payload, for_team)
    logger.info(f"Team alert for {team_id} delivered to {delivered} client(s)")
    return {"delivered": delivered}
