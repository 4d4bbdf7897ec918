"""
Mind Mate application settings.

Extends the shared BaseAppSettings with Google OAuth and wellness-engine
tuning values. Loaded once at import time from the environment / .env.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Application-specific settings."""

    APP_NAME: str = "Mind Mate API"
    APP_VERSION: str = "1.0.0"

    # Routes are mounted at the root by default so existing clients keep working
    API_PREFIX: str = ""

    # ==========================================================================
    # Google OAuth / Fit
    # ==========================================================================
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = ""
    GOOGLE_FIT_TARGET_STEPS: int = 10000

    # ==========================================================================
    # Wellness Engine
    # ==========================================================================
    MOOD_HISTORY_WINDOW: int = 30  # Entries considered for challenges/recommendations
    CHALLENGE_HISTORY_LIMIT: int = 10
    SSE_KEEPALIVE_SECONDS: float = 15.0


settings = Settings()
