"""
AI services - provider chain, JSON extraction and fallback handling.
"""

from mindmate.services.ai.fallback import parse_json_object, try_ai_then_fallback
from mindmate.services.ai.llm_service import (
    FALLBACK_REPLIES,
    LLMService,
    SYSTEM_PROMPT,
    build_llm_service,
)

__all__ = [
    "parse_json_object",
    "try_ai_then_fallback",
    "FALLBACK_REPLIES",
    "LLMService",
    "SYSTEM_PROMPT",
    "build_llm_service",
]
