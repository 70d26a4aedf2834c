"""
LinkedIn OAuth integration.
Authorization-code flow against LinkedIn directly, plus the profile and
email lookups needed to mint a session token.
"""
import logging
from typing import Optional, Dict, Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from outreach_gateway.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

class LinkedInConfig(BaseModel):
    """LinkedIn API configuration."""
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = "http://localhost:5000/auth/linkedin/callback"
    scopes: list = ["r_liteprofile", "r_emailaddress"]
    timeout: float = 30.0

    @classmethod
    def from_settings(cls) -> "LinkedInConfig":
        return cls(
            client_id=settings.LINKEDIN_CLIENT_ID,
            client_secret=settings.LINKEDIN_CLIENT_SECRET,
            redirect_uri=settings.LINKEDIN_CALLBACK_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS
        )


class LinkedInAPIError(Exception):
    """LinkedIn rejected a token exchange or profile request."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


# =============================================================================
# LINKEDIN API CLIENT
# =============================================================================

class LinkedInAPIClient:
    """LinkedIn API client for the OAuth handshake."""

    BASE_URL = "https://api.linkedin.com/v2"
    AUTH_URL = "https://www.linkedin.com/oauth/v2"

    def __init__(self, config: LinkedInConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    @staticmethod
    def headers(access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "X-Restli-Protocol-Version": "2.0.0"
        }

    # -------------------------------------------------------------------------
    # OAuth Flow
    # -------------------------------------------------------------------------

    def get_auth_url(self, state: str) -> str:
        """
        Generate OAuth authorization URL.
        User visits this to authorize the app.
        """
        query = urlencode({
            "response_type": "code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "scope": " ".join(self.config.scopes),
            "state": state
        })
        return f"{self.AUTH_URL}/authorization?{query}"

    async def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        """
        Exchange authorization code for access token.
        Called after OAuth callback.
        """
        response = await self.client.post(
            f"{self.AUTH_URL}/accessToken",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.config.redirect_uri,
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )

        if response.status_code == 200:
            return response.json()
        raise LinkedInAPIError("Token exchange failed", response.status_code, response.text)

    # -------------------------------------------------------------------------
    # Profile Operations
    # -------------------------------------------------------------------------

    async def get_current_profile(self, access_token: str) -> Dict[str, Any]:
        """Get the authenticated member's lite profile."""
        response = await self.client.get(f"{self.BASE_URL}/me", headers=self.headers(access_token))

        if response.status_code == 200:
            return response.json()
        raise LinkedInAPIError("Failed to get profile", response.status_code, response.text)

    async def get_email(self, access_token: str) -> Optional[str]:
        """Primary email address, or None when the scope was not granted."""
        response = await self.client.get(
            f"{self.BASE_URL}/emailAddress",
            params={"q": "members", "projection": "(elements*(handle~))"},
            headers=self.headers(access_token)
        )
        if response.status_code != 200:
            logger.warning(f"LinkedIn email lookup failed: {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning("LinkedIn email lookup returned an unreadable body")
            return None
        if not isinstance(data, dict):
            return None

        elements = data.get("elements") or []
        if not elements:
            return None
        return elements[0].get("handle~", {}).get("emailAddress")

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
