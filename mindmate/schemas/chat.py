"""
Pydantic models for the chat assistant.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """POST /chat"""
    message: str = Field(..., min_length=1, max_length=5000)


class ChatResponseData(BaseModel):
    reply: str
    provider: str


class ProviderInfoResponse(BaseModel):
    """Response data for GET /chat/info"""
    provider: str
    model: Optional[str] = None
    status: str
    apiKeyConfigured: bool
