"""
FastAPI router for wellness recommendations.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils.responses import success_response
from mindmate.dependencies import get_recommendation_service
from mindmate.pipelines import recommendations as pipelines
from mindmate.pipelines.identity import user_id_or_anonymous
from mindmate.schemas.recommendations import RecommendationRequest
from mindmate.services.recommendations.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("/generate")
async def generate_recommendations(
    body: RecommendationRequest,
    recommendation_service: Annotated[RecommendationService, Depends(get_recommendation_service)],
):
    """
    Generate recommendations.

    ``full`` asks the AI provider first; ``lightweight`` uses the history
    heuristic only.
    """
    result = await pipelines.recommendations_pipeline(
        recommendation_service=recommendation_service,
        user_id=user_id_or_anonymous(body.userId),
        mode=body.mode,
        work_context=body.workContext,
        company_role=body.companyRole,
        google_fit=body.googleFitData,
    )
    return success_response(result)
