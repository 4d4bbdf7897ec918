"""
Auth services - demo login.
"""

from mindmate.services.auth.login_service import DEMO_USERS, LoginService, derive_user_id

__all__ = ["DEMO_USERS", "LoginService", "derive_user_id"]
