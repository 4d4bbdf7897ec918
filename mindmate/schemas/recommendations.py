"""
Pydantic models for recommendation generation.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class RecommendationRequest(BaseModel):
    """POST /recommendations/generate"""
    userId: Optional[str] = None
    mode: str = Field(default="full", pattern="^(full|lightweight)$")
    workContext: Optional[str] = None
    companyRole: Optional[str] = None
    googleFitData: Optional[Dict[str, Any]] = None
