"""
Alert services - SSE broadcasting and stress checks.
"""

from mindmate.services.alerts.broadcaster import AlertBroadcaster, Subscription, format_event
from mindmate.services.alerts.stress_alert_service import StressAlertService

__all__ = [
    "AlertBroadcaster",
    "Subscription",
    "format_event",
    "StressAlertService",
]
