"""
Helpers for AI-first features with deterministic fallbacks.
"""

import json
import logging
import re
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from common.ai import MalformedUpstreamResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Extract the JSON object embedded in an LLM reply.

    Takes everything from the first "{" to the last "}". If that does not
    parse, control characters (raw newlines inside strings, mostly) are
    replaced with spaces and parsing is retried once.

    Raises:
        MalformedUpstreamResponse: If no JSON object can be recovered
    """
    if not text:
        raise MalformedUpstreamResponse("Empty response", raw="")

    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        raise MalformedUpstreamResponse("No JSON object in response", raw=text)

    candidate = text[start:end + 1]
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"JSON parse failed, retrying after cleanup: {e}")
        try:
            parsed = json.loads(_CONTROL_CHARS.sub(" ", candidate))
        except json.JSONDecodeError as e2:
            raise MalformedUpstreamResponse(f"Invalid JSON after cleanup: {e2}", raw=text) from e2

    if not isinstance(parsed, dict):
        raise MalformedUpstreamResponse("Response JSON is not an object", raw=text)
    return parsed


async def try_ai_then_fallback(
    primary: Optional[Callable[[], Awaitable[T]]],
    fallback: Callable[[], T],
    label: str = "AI",
) -> T:
    """
    Run the AI path, degrading to the deterministic one on any failure.

    Args:
        primary: Coroutine factory for the AI path, None when AI is disabled
        fallback: Synchronous deterministic producer
        label: Name used in log messages

    Returns:
        The primary result, or the fallback result
    """
    if primary is None:
        logger.info(f"[{label}] No AI provider configured, using fallback")
        return fallback()

    try:
        return await primary()
    except Exception as e:
        logger.warning(f"[{label}] AI generation failed, using fallback: {e}")
        return fallback()
