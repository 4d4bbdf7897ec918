"""
Demo login.

Checks credentials against a fixed table and issues an opaque token. This
is not real authentication: the token is never verified by other routes.
"""

import base64
import logging
import re
import time
from typing import Any, Dict, Optional

from common.utils.exceptions import UnauthorizedException, ValidationException

logger = logging.getLogger(__name__)

DEMO_USERS: Dict[str, str] = {
    "demo@mindmate.com": "password123",
    "user@mindmate.com": "securepass",
}

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def derive_user_id(email: str) -> str:
    """Local part of the email, lowercased, with non-alphanumerics removed."""
    return _NON_ALNUM.sub("", email.split("@")[0].lower())


class LoginService:
    """
    Validates demo credentials.
    """

    def __init__(self, users: Optional[Dict[str, str]] = None):
        self._users = users if users is not None else dict(DEMO_USERS)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Check credentials and build the session payload.

        Raises:
            ValidationException: If email or password is missing
            UnauthorizedException: If the credentials do not match
        """
        if not email or not password:
            raise ValidationException("Email and password are required", code="CREDENTIALS_REQUIRED")

        if self._users.get(email) != password:
            logger.info(f"Failed login attempt for {email}")
            raise UnauthorizedException("Invalid email or password", code="INVALID_CREDENTIALS")

        raw = f"{email}:{int(time.time() * 1000)}".encode("utf-8")
        token = base64.b64encode(raw).decode("ascii")
        user_id = derive_user_id(email)

        logger.info(f"User logged in: {user_id}")
        return {
            "token": token,
            "userId": user_id,
            "user": {"email": email, "userId": user_id},
        }
