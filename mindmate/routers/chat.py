"""
FastAPI router for the chat assistant.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils.responses import success_response
from mindmate.dependencies import get_llm_service
from mindmate.pipelines import chat as pipelines
from mindmate.schemas.chat import ChatRequest
from mindmate.services.ai.llm_service import LLMService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def send_message(
    body: ChatRequest,
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
):
    """Reply to a chat message, with canned replies when no provider answers."""
    result = await pipelines.chat_pipeline(llm_service=llm_service, message=body.message)
    return success_response(result)


@router.get("/info")
async def get_provider_info(llm_service: Annotated[LLMService, Depends(get_llm_service)]):
    return success_response(pipelines.provider_info_pipeline(llm_service=llm_service))
