"""
Mind Mate API Routers.

All routers are imported here for easy access.
"""

from mindmate.routers.mood import router as mood_router
from mindmate.routers.mood import summary_router
from mindmate.routers.chat import router as chat_router
from mindmate.routers.stress_recovery import router as stress_recovery_router
from mindmate.routers.alerts import router as alerts_router
from mindmate.routers.alerts import team_router as team_alerts_router
from mindmate.routers.recommendations import router as recommendations_router
from mindmate.routers.auth import router as login_router
from mindmate.routers.auth import google_router as google_auth_router
from mindmate.routers.google_fit import router as google_fit_router

__all__ = [
    "mood_router",
    "summary_router",
    "chat_router",
    "stress_recovery_router",
    "alerts_router",
    "team_alerts_router",
    "recommendations_router",
    "login_router",
    "google_auth_router",
    "google_fit_router",
]
