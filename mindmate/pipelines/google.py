"""
Google sign-in and Google Fit pipeline functions.
"""

import logging
from typing import Any, Dict, Optional

from common.utils.exceptions import (
    BadRequestException,
    InternalServerException,
    UnauthorizedException,
)
from common.utils.responses import error_response, success_response
from mindmate.services.google.google_fit_service import (
    GoogleFitError,
    GoogleFitService,
    HEART_POINTS_FAILED_MESSAGE,
    HEART_POINTS_UNAVAILABLE_MESSAGE,
)
from mindmate.services.google.google_oauth_service import GoogleOAuthService

logger = logging.getLogger(__name__)


def _fit_exception(error: GoogleFitError) -> Exception:
    if error.is_unauthorized:
        return UnauthorizedException(error.message, code="GOOGLE_TOKEN_EXPIRED")
    return InternalServerException(error.message, code="GOOGLE_FIT_ERROR")


def auth_url_pipeline(oauth_service: GoogleOAuthService, state: Optional[str] = None) -> Dict[str, Any]:
    if not oauth_service.is_configured:
        logger.warning("Google OAuth client is not fully configured")
    return {"authUrl": oauth_service.get_auth_url(state)}


async def google_callback_pipeline(oauth_service: GoogleOAuthService, code: str) -> Dict[str, Any]:
    try:
        return await oauth_service.complete_sign_in(code)
    except ValueError as e:
        logger.error(f"Google sign-in failed: {e}")
        raise BadRequestException("Failed to get tokens", code="GOOGLE_AUTH_FAILED", details=str(e))


async def fit_metric_pipeline(
    fit_service: GoogleFitService,
    metric: str,
    access_token: str,
    days: int,
    refresh_token: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Fetch one of steps / heart-rate / data.

    Raises:
        UnauthorizedException: Google rejected the token
        InternalServerException: Any other Google Fit failure
    """
    fetchers = {
        "steps": fit_service.get_steps,
        "heart-rate": fit_service.get_heart_rate,
        "data": fit_service.get_daily_metrics,
    }
    try:
        return await fetchers[metric](access_token, days, refresh_token)
    except GoogleFitError as e:
        logger.error(f"[{metric}] Google Fit error: {e.message}")
        raise _fit_exception(e)


async def heart_points_pipeline(
    fit_service: GoogleFitService,
    access_token: str,
    days: int,
    refresh_token: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Heart minutes, or a soft failure body with a placeholder payload.
    """
    try:
        return success_response(await fit_service.get_heart_points(access_token, days, refresh_token))
    except GoogleFitError as e:
        logger.warning(f"[heart-points] Google Fit error: {e.message}")
        placeholder = {"heartPoints": 0, "dailyBreakdown": [], "hasData": False}

        if e.is_missing_datasource:
            return error_response(
                "Heart Minutes not available",
                code="HEART_MINUTES_UNAVAILABLE",
                data={**placeholder, "message": HEART_POINTS_UNAVAILABLE_MESSAGE},
            )
        return error_response(
            e.message,
            code="GOOGLE_FIT_ERROR",
            data={**placeholder, "message": HEART_POINTS_FAILED_MESSAGE},
        )


async def monthly_pipeline(
    fit_service: GoogleFitService,
    access_token: str,
    year: int,
    month: int,
    refresh_token: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        return await fit_service.get_monthly(access_token, year, month, refresh_token)
    except GoogleFitError as e:
        logger.error(f"[monthly] Google Fit error: {e.message}")
        raise _fit_exception(e)
