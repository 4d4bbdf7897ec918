"""
FastAPI router for Google Fit metrics.

All endpoints take the user's Google access token as a query parameter;
an optional refresh token allows one transparent refresh on expiry.
"""

import logging
from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from common.utils.exceptions import BadRequestException
from common.utils.responses import error_response, success_response
from mindmate.dependencies import get_google_fit_service
from mindmate.pipelines import google as pipelines
from mindmate.services.google.google_fit_service import GoogleFitService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/google-fit", tags=["google-fit"])

FitServiceDep = Annotated[GoogleFitService, Depends(get_google_fit_service)]


def _require_token(access_token: Optional[str]) -> str:
    if not access_token:
        raise BadRequestException("accessToken required", code="ACCESS_TOKEN_REQUIRED")
    return access_token


@router.get("/steps")
async def get_steps(
    fit_service: FitServiceDep,
    accessToken: Optional[str] = Query(default=None),
    refreshToken: Optional[str] = Query(default=None),
    days: int = Query(default=1, ge=1, le=90),
):
    result = await pipelines.fit_metric_pipeline(
        fit_service=fit_service,
        metric="steps",
        access_token=_require_token(accessToken),
        days=days,
        refresh_token=refreshToken,
    )
    return success_response(result)


@router.get("/heart-rate")
async def get_heart_rate(
    fit_service: FitServiceDep,
    accessToken: Optional[str] = Query(default=None),
    refreshToken: Optional[str] = Query(default=None),
    days: int = Query(default=1, ge=1, le=90),
):
    result = await pipelines.fit_metric_pipeline(
        fit_service=fit_service,
        metric="heart-rate",
        access_token=_require_token(accessToken),
        days=days,
        refresh_token=refreshToken,
    )
    return success_response(result)


@router.get("/heart-points")
async def get_heart_points(
    fit_service: FitServiceDep,
    accessToken: Optional[str] = Query(default=None),
    refreshToken: Optional[str] = Query(default=None),
    days: int = Query(default=1, ge=1, le=90),
):
    """
    Heart minutes per day.

    Upstream failures are reported in the body with placeholder data.
    """
    if not accessToken:
        return JSONResponse(
            status_code=400,
            content=error_response(
                "accessToken required",
                code="ACCESS_TOKEN_REQUIRED",
                data={"heartPoints": 0, "dailyBreakdown": [], "hasData": False},
            ),
        )

    return await pipelines.heart_points_pipeline(
        fit_service=fit_service,
        access_token=accessToken,
        days=days,
        refresh_token=refreshToken,
    )


@router.get("/data")
async def get_daily_metrics(
    fit_service: FitServiceDep,
    accessToken: Optional[str] = Query(default=None),
    refreshToken: Optional[str] = Query(default=None),
    days: int = Query(default=7, ge=1, le=90),
):
    result = await pipelines.fit_metric_pipeline(
        fit_service=fit_service,
        metric="data",
        access_token=_require_token(accessToken),
        days=days,
        refresh_token=refreshToken,
    )
    return success_response(result)


@router.get("/monthly")
async def get_monthly(
    fit_service: FitServiceDep,
    accessToken: Optional[str] = Query(default=None),
    refreshToken: Optional[str] = Query(default=None),
    year: Optional[int] = Query(default=None),
    month: Optional[int] = Query(default=None, ge=1, le=12),
):
    now = datetime.now()
    result = await pipelines.monthly_pipeline(
        fit_service=fit_service,
        access_token=_require_token(accessToken),
        year=year or now.year,
        month=month or now.month,
        refresh_token=refreshToken,
    )
    return success_response(result)


@router.get("/target-steps")
async def get_target_steps(fit_service: FitServiceDep):
    return success_response(fit_service.target_steps())
