"""
Pydantic models for demo login and Google sign-in.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """POST /login"""
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleCallbackRequest(BaseModel):
    """POST /google-auth/callback"""
    code: str = Field(..., min_length=1)


class GoogleSignInResponseData(BaseModel):
    accessToken: str
    refreshToken: Optional[str] = None
    userId: str
    email: str
    name: str
