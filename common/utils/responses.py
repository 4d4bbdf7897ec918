"""
Standard API response helpers.

Provides consistent response formatting for success and error cases.

Example:
    from common.utils import success_response

    @router.get("/mood")
    async def get_mood(user_id: str):
        entries = await mood_service.get_recent(user_id)
        return success_response({"entries": entries})
"""

from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
    data: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Used where an endpoint reports a soft failure with a 200 status,
    e.g. a fitness metric the user's device cannot record.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "HEART_MINUTES_UNAVAILABLE")
        details: Additional error details
        data: Placeholder payload so clients can still render

    Returns:
        Dictionary with success=False and error info
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    response: Dict[str, Any] = {"success": False, "error": error}

    if data is not None:
        response["data"] = data

    return response
