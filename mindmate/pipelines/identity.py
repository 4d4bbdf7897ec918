"""
User id resolution shared by the pipelines.
"""

from typing import Optional

from common.utils.exceptions import UnauthorizedException
from mindmate.services.document_layout import validate_user_id

ANONYMOUS_USER = "anonymous"


def require_user_id(*candidates: Optional[str]) -> str:
    """
    First non-empty user id among the candidates (body, then query).

    Raises:
        UnauthorizedException: If none was supplied
        ValidationException: If the id is reserved
    """
    for candidate in candidates:
        if candidate:
            return validate_user_id(candidate)
    raise UnauthorizedException("userId required", code="USER_ID_REQUIRED")


def user_id_or_anonymous(*candidates: Optional[str]) -> str:
    for candidate in candidates:
        if candidate:
            return validate_user_id(candidate)
    return ANONYMOUS_USER
