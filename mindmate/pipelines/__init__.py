"""
Pipeline functions for Mind Mate.

Stateless orchestration between routers and services.
"""

from mindmate.pipelines import alerts, chat, google, mood, recommendations, stress_recovery
from mindmate.pipelines.identity import require_user_id, user_id_or_anonymous

__all__ = [
    "alerts",
    "chat",
    "google",
    "mood",
    "recommendations",
    "stress_recovery",
    "require_user_id",
    "user_id_or_anonymous",
]
