"""
Recommendation services.
"""

from mindmate.services.recommendations.recommendation_service import (
    MODE_FULL,
    MODE_LIGHTWEIGHT,
    RecommendationService,
)

__all__ = ["MODE_FULL", "MODE_LIGHTWEIGHT", "RecommendationService"]
