"""
Pydantic models for the stress recovery challenge flow.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, model_validator


class GenerateChallengeRequest(BaseModel):
    """POST /stress-recovery/generate"""
    userId: Optional[str] = None
    workContext: Optional[str] = Field(default=None, description="office, remote or hybrid")
    companyRole: Optional[str] = None
    googleFitData: Optional[Dict[str, Any]] = None


class StartChallengeRequest(BaseModel):
    """POST /stress-recovery/start"""
    userId: Optional[str] = None
    challenge: Dict[str, Any] = Field(default_factory=dict)


class ChallengeRequest(BaseModel):
    """POST /stress-recovery/complete and /discard"""
    userId: Optional[str] = None
    challengeId: Optional[str] = None


class DayCompleteRequest(ChallengeRequest):
    """POST /stress-recovery/day-complete"""
    dayNumber: int = Field(..., ge=1)


class TaskProgressRequest(DayCompleteRequest):
    """POST /stress-recovery/task-progress"""
    taskId: Optional[str] = None
    taskName: Optional[str] = None
    completed: bool = True

    @model_validator(mode="after")
    def check_task_reference(self):
        if not self.taskId and not self.taskName:
            raise ValueError("taskId or taskName required")
        return self
