"""
Pydantic models for mood tracking and summary request/response validation.
"""

from typing import Optional, List, Dict
from pydantic import BaseModel, Field


# =============================================================================
# Request Schemas
# =============================================================================

class MoodEntryRequest(BaseModel):
    """POST /mood"""
    userId: Optional[str] = None
    mood: int = Field(..., ge=0, le=4, strict=True, description="0-4 scale")
    stress: int = Field(..., ge=0, le=5, strict=True, description="0-5 scale")
    feeling: Optional[str] = Field(default=None, max_length=200)
    context: Optional[str] = Field(default=None, max_length=200)
    dayCompleted: Optional[int] = None


class UserRequest(BaseModel):
    """Body carrying only the user id (POST /mood/clear)."""
    userId: Optional[str] = None


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class MoodEntryResponse(BaseModel):
    mood: int
    stress: int
    feeling: str
    context: str
    dayCompleted: Optional[int] = None
    timestamp: str


class SummaryStatsResponse(BaseModel):
    entriesCount: int
    avgMood: float
    avgStress: float
    maxStress: float
    minMood: float
    maxMood: float
    moodDistribution: Dict[str, int]
    trendDirection: str


class SummaryResponseData(BaseModel):
    """Response data for GET /summary"""
    summary: str
    entriesAnalyzed: int
    stats: SummaryStatsResponse


class MoodListResponseData(BaseModel):
    entries: List[MoodEntryResponse]
