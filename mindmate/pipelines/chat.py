"""
Chat pipeline functions.
"""

import logging
from typing import Any, Dict

from mindmate.services.ai.llm_service import LLMService

logger = logging.getLogger(__name__)


async def chat_pipeline(llm_service: LLMService, message: str) -> Dict[str, Any]:
    reply = await llm_service.generate_chat_reply(message)
    return {"reply": reply, "provider": llm_service.provider_info()["provider"]}


def provider_info_pipeline(llm_service: LLMService) -> Dict[str, Any]:
    return llm_service.provider_info()
