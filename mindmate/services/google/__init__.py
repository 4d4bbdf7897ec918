"""
Google services - OAuth and Google Fit.
"""

from mindmate.services.google.google_oauth_service import GoogleOAuthService
from mindmate.services.google.google_fit_service import (
    GoogleFitError,
    GoogleFitService,
    HEART_POINTS_FAILED_MESSAGE,
    HEART_POINTS_UNAVAILABLE_MESSAGE,
)

__all__ = [
    "GoogleOAuthService",
    "GoogleFitError",
    "GoogleFitService",
    "HEART_POINTS_FAILED_MESSAGE",
    "HEART_POINTS_UNAVAILABLE_MESSAGE",
]
