"""
Pydantic models for stress checks and team alerts.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class StressCheckRequest(BaseModel):
    """POST /alerts/stress-check"""
    userId: Optional[str] = None
    googleFitData: Optional[Dict[str, Any]] = None


class TeamAlertRequest(BaseModel):
    """POST /team-alerts/alert"""
    teamId: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=1000)
    level: str = Field(default="info", pattern="^(info|warning|critical)$")
