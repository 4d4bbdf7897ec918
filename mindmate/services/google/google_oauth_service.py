"""
Google OAuth client for Google Fit access.

Builds the consent URL, exchanges codes for tokens, refreshes expired
access tokens and reads the signed-in user's profile.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from mindmate.services.auth.login_service import derive_user_id

logger = logging.getLogger(__name__)


class GoogleOAuthService:
    """
    Google OAuth client.
    """

    OAUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    SCOPES = [
        "https://www.googleapis.com/auth/userinfo.profile",
        "https://www.googleapis.com/auth/userinfo.email",
        "https://www.googleapis.com/auth/fitness.activity.read",
        "https://www.googleapis.com/auth/fitness.heart_rate.read",
        "https://www.googleapis.com/auth/fitness.nutrition.read",
        "https://www.googleapis.com/auth/fitness.sleep.read",
    ]

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize GoogleOAuthService.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: OAuth callback URL
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._client_id = (client_id or "").strip()
        self._client_secret = (client_secret or "").strip()
        self._redirect_uri = (redirect_uri or "").strip()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret and self._redirect_uri)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=30.0)

    def get_auth_url(self, state: Optional[str] = None) -> str:
        """
        Generate Google OAuth authorization URL.

        Args:
            state: Opaque state value echoed back to the callback

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.SCOPES),
            "access_type": "offline",
            "prompt": "consent",
        }

        if state:
            params["state"] = state

        return f"{self.OAUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange authorization code for tokens.

        Returns:
            dict with accessToken, refreshToken, expiresIn

        Raises:
            ValueError: If Google rejects the code
        """
        async with self._client() as client:
            response = await client.post(
                self.TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "redirect_uri": self._redirect_uri,
                    "grant_type": "authorization_code",
                }
            )

            if response.status_code != 200:
                logger.error(f"Token exchange failed: {response.text}")
                raise ValueError(f"Token exchange failed: {response.status_code}")

            data = response.json()
            return {
                "accessToken": data["access_token"],
                "refreshToken": data.get("refresh_token"),
                "expiresIn": data.get("expires_in"),
            }

    async def refresh_token(self, refresh_token: str) -> Dict[str, Any]:
        """
        Refresh an expired access token.

        Raises:
            ValueError: If Google rejects the refresh token
        """
        async with self._client() as client:
            response = await client.post(
                self.TOKEN_URL,
                data={
                    "refresh_token": refresh_token,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "grant_type": "refresh_token",
                }
            )

            if response.status_code != 200:
                logger.error(f"Token refresh failed: {response.text}")
                raise ValueError(f"Token refresh failed: {response.status_code}")

            data = response.json()
            return {
                "accessToken": data["access_token"],
                "expiresIn": data.get("expires_in"),
            }

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        """
        Get the signed-in user's email and name.

        Raises:
            ValueError: If the profile cannot be read
        """
        async with self._client() as client:
            response = await client.get(
                self.USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"}
            )

            if response.status_code != 200:
                logger.error(f"User info fetch failed: {response.text}")
                raise ValueError("Failed to get user info")

            return response.json()

    async def complete_sign_in(self, code: str) -> Dict[str, Any]:
        """
        Exchange the code and resolve the app user id.

        Returns:
            dict with accessToken, refreshToken, userId, email, name
        """
        tokens = await self.exchange_code(code)
        info = await self.get_user_info(tokens["accessToken"])

        email = info.get("email")
        if not email:
            raise ValueError("Google account has no email address")

        user_id = derive_user_id(email)
        logger.info(f"User authenticated via Google: {email} (ID: {user_id})")

        return {
            "accessToken": tokens["accessToken"],
            "refreshToken": tokens.get("refreshToken"),
            "userId": user_id,
            "email": email,
            "name": info.get("name") or info.get("given_name") or "User",
        }
