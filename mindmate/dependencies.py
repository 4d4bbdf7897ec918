"""
FastAPI dependencies for Mind Mate application.

Provides dependency injection for all services.
"""

from functools import lru_cache
from typing import Optional

from common.database import DocumentStore

# AI services
from mindmate.services.ai.llm_service import LLMService

# Mood services
from mindmate.services.mood.mood_service import MoodService

# Challenge services
from mindmate.services.challenges.catalog import ChallengeCatalog
from mindmate.services.challenges.selector import ChallengeSelector
from mindmate.services.challenges.generator import ChallengeGenerator
from mindmate.services.challenges.challenge_service import ChallengeService

# Alert services
from mindmate.services.alerts.broadcaster import AlertBroadcaster
from mindmate.services.alerts.stress_alert_service import StressAlertService

# Recommendation services
from mindmate.services.recommendations.recommendation_service import RecommendationService

# Google services
from mindmate.services.google.google_oauth_service import GoogleOAuthService
from mindmate.services.google.google_fit_service import GoogleFitService

# Auth services
from mindmate.services.auth.login_service import LoginService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# AI
_llm_service: Optional[LLMService] = None

# Mood
_mood_service: Optional[MoodService] = None

# Challenges
_challenge_service: Optional[ChallengeService] = None

# Alerts
_broadcaster: Optional[AlertBroadcaster] = None
_stress_alert_service: Optional[StressAlertService] = None

# Recommendations
_recommendation_service: Optional[RecommendationService] = None

# Google
_google_oauth_service: Optional[GoogleOAuthService] = None
_google_fit_service: Optional[GoogleFitService] = None


# ─────────────────────────────────────────────────────────────────
# Cached singletons
# ─────────────────────────────────────────────────────────────────

@lru_cache()
def get_login_service() -> LoginService:
    """Get cached LoginService instance."""
    return LoginService()


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_alert_services(store: DocumentStore) -> None:
    """Initialize the SSE broadcaster and stress checks."""
    global _broadcaster, _stress_alert_service

    _broadcaster = AlertBroadcaster()
    _stress_alert_service = StressAlertService(store=store)


def init_mood_services(store: DocumentStore) -> None:
    """Initialize mood services."""
    global _mood_service

    _mood_service = MoodService(store=store)


def init_challenge_services(
    store: DocumentStore,
    llm_service: LLMService,
    history_window: int = 30,
    history_limit: int = 10,
) -> None:
    """Initialize challenge generation and lifecycle services."""
    global _challenge_service

    if _broadcaster is None:
        raise RuntimeError("Alert services must be initialized before challenge services.")

    generator = ChallengeGenerator(
        llm_service=llm_service,
        selector=ChallengeSelector(ChallengeCatalog()),
    )
    _challenge_service = ChallengeService(
        store=store,
        generator=generator,
        broadcaster=_broadcaster,
        history_window=history_window,
        history_limit=history_limit,
    )


def init_recommendation_services(store: DocumentStore, llm_service: LLMService, history_window: int = 30) -> None:
    """Initialize recommendation services."""
    global _recommendation_service

    _recommendation_service = RecommendationService(
        store=store,
        llm_service=llm_service,
        history_window=history_window,
    )


def init_google_services(
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    target_steps: int = 10000,
) -> None:
    """Initialize Google OAuth and Fit clients."""
    global _google_oauth_service, _google_fit_service

    _google_oauth_service = GoogleOAuthService(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
    )
    _google_fit_service = GoogleFitService(
        oauth_service=_google_oauth_service,
        target_steps=target_steps,
    )


def init_all_services(store: DocumentStore, llm_service: LLMService, settings) -> None:
    """
    Initialize all services at application startup.

    Args:
        store: Document store holding all application state
        llm_service: Configured LLM provider chain
        settings: Application settings
    """
    global _llm_service
    _llm_service = llm_service

    init_alert_services(store)
    init_mood_services(store)
    init_challenge_services(
        store,
        llm_service,
        history_window=settings.MOOD_HISTORY_WINDOW,
        history_limit=settings.CHALLENGE_HISTORY_LIMIT,
    )
    init_recommendation_services(store, llm_service, history_window=settings.MOOD_HISTORY_WINDOW)
    init_google_services(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=settings.GOOGLE_REDIRECT_URI,
        target_steps=settings.GOOGLE_FIT_TARGET_STEPS,
    )


# ─────────────────────────────────────────────────────────────────
# AI getters
# ─────────────────────────────────────────────────────────────────

def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    if _llm_service is None:
        raise RuntimeError("LLM service not initialized.")
    return _llm_service


# ─────────────────────────────────────────────────────────────────
# Mood getters
# ─────────────────────────────────────────────────────────────────

def get_mood_service() -> MoodService:
    """Get mood service instance."""
    if _mood_service is None:
        raise RuntimeError("Mood services not initialized.")
    return _mood_service


# ─────────────────────────────────────────────────────────────────
# Challenge getters
# ─────────────────────────────────────────────────────────────────

def get_challenge_service() -> ChallengeService:
    """Get challenge service instance."""
    if _challenge_service is None:
        raise RuntimeError("Challenge services not initialized.")
    return _challenge_service


# ─────────────────────────────────────────────────────────────────
# Alert getters
# ─────────────────────────────────────────────────────────────────

def get_broadcaster() -> AlertBroadcaster:
    """Get SSE broadcaster instance."""
    if _broadcaster is None:
        raise RuntimeError("Alert services not initialized.")
    return _broadcaster


def get_stress_alert_service() -> StressAlertService:
    """Get stress alert service instance."""
    if _stress_alert_service is None:
        raise RuntimeError("Alert services not initialized.")
    return _stress_alert_service


# ─────────────────────────────────────────────────────────────────
# Recommendation getters
# ─────────────────────────────────────────────────────────────────

def get_recommendation_service() -> RecommendationService:
    """Get recommendation service instance."""
    if _recommendation_service is None:
        raise RuntimeError("Recommendation services not initialized.")
    return _recommendation_service


# ─────────────────────────────────────────────────────────────────
# Google getters
# ─────────────────────────────────────────────────────────────────

def get_google_oauth_service() -> GoogleOAuthService:
    """Get Google OAuth service instance."""
    if _google_oauth_service is None:
        raise RuntimeError("Google services not initialized.")
    return _google_oauth_service


def get_google_fit_service() -> GoogleFitService:
    """Get Google Fit service instance."""
    if _google_fit_service is None:
        raise RuntimeError("Google services not initialized.")
    return _google_fit_service
