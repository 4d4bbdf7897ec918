"""
FastAPI router for demo login and Google sign-in.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils.responses import success_response
from mindmate.dependencies import get_google_oauth_service, get_login_service
from mindmate.pipelines import google as google_pipelines
from mindmate.schemas.auth import GoogleCallbackRequest, LoginRequest
from mindmate.services.auth.login_service import LoginService
from mindmate.services.google.google_oauth_service import GoogleOAuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/login", tags=["auth"])
google_router = APIRouter(prefix="/google-auth", tags=["auth"])


@router.post("")
async def login(
    body: LoginRequest,
    login_service: Annotated[LoginService, Depends(get_login_service)],
):
    """Sign in against the demo user table."""
    result = login_service.login(body.email, body.password)
    return success_response(result, message="Login successful")


@google_router.get("/auth-url")
async def get_auth_url(
    oauth_service: Annotated[GoogleOAuthService, Depends(get_google_oauth_service)],
    state: Optional[str] = Query(default=None),
):
    return success_response(google_pipelines.auth_url_pipeline(oauth_service=oauth_service, state=state))


@google_router.post("/callback")
async def google_callback(
    body: GoogleCallbackRequest,
    oauth_service: Annotated[GoogleOAuthService, Depends(get_google_oauth_service)],
):
    """
    Exchange an authorization code for tokens and the user's profile.
    """
    result = await google_pipelines.google_callback_pipeline(oauth_service=oauth_service, code=body.code)
    return success_response(result)
