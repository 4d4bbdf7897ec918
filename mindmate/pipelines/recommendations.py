"""
Wellness recommendation pipeline functions.
"""

import logging
from typing import Any, Dict, Optional

from mindmate.services.recommendations.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)


async def recommendations_pipeline(
    recommendation_service: RecommendationService,
    user_id: str,
    mode: str = "full",
    work_context: Optional[str] = None,
    company_role: Optional[str] = None,
    google_fit: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    recommendations = await recommendation_service.generate(
        user_id,
        mode=mode,
        work_context=work_context,
        company_role=company_role,
        google_fit=google_fit,
    )
    logger.info(f"Recommendations for {user_id} ({mode}, {recommendations.get('generatedBy')})")
    return {"recommendations": recommendations}
