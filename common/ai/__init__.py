"""
AI module - Pluggable LLM providers (Groq, OpenAI, Claude).
"""

from common.ai.base import AIProvider
from common.ai.claude import ClaudeProvider
from common.ai.openai import OpenAIProvider, GROQ_BASE_URL
from common.ai.errors import (
    AIProviderError,
    UpstreamUnavailableError,
    MalformedUpstreamResponse,
)

__all__ = [
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "GROQ_BASE_URL",
    "AIProviderError",
    "UpstreamUnavailableError",
    "MalformedUpstreamResponse",
]
