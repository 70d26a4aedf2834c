"""
Unipile API integration.
Hosted LinkedIn connect, account lookup and message delivery.
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

class UnipileConfig(BaseModel):
    """Unipile API configuration."""
    api_key: str = ""
    base_url: str = "https://api.unipile.com/v1"
    redirect_uri: str = "http://localhost:5000/auth/callback"
    account_id: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_settings(cls) -> "UnipileConfig":
        return cls(
            api_key=settings.UNIPILE_API_KEY,
            base_url=settings.UNIPILE_BASE_URL.rstrip("/"),
            redirect_uri=settings.REDIRECT_URI,
            account_id=settings.UNIPILE_ACCOUNT_ID or None,
            timeout=settings.HTTP_TIMEOUT_SECONDS
        )


class UnipileAPIError(Exception):
    """Non-2xx response, unreadable body or transport failure from Unipile."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


# =============================================================================
# UNIPILE API CLIENT
# =============================================================================

class UnipileAPIClient:
    """
    Unipile API client.

    One instance is shared by the whole process; it owns a single
    httpx.AsyncClient that is closed at shutdown.
    """

    PROVIDER = "linkedin"

    def __init__(self, config: UnipileConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport
        )

    def headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        """API key headers, plus the user's bearer token when there is one."""
        headers = {
            "X-API-KEY": self.config.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json"
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        access_token: Optional[str] = None,
        json_data: Optional[dict] = None
    ) -> Dict[str, Any]:
        logger.debug(f"Unipile request: {method} {endpoint}")
        try:
            response = await self.client.request(
                method,
                endpoint,
                headers=self.headers(access_token),
                json=json_data
            )
        except httpx.HTTPError as e:
            raise UnipileAPIError(f"Unipile request failed: {e}", payload={"error": str(e)}) from e

        try:
            payload = response.json()
        except ValueError:
            if response.status_code < 400:
                raise UnipileAPIError(
                    "Unexpected Unipile response",
                    response.status_code,
                    {"raw_response": response.text}
                )
            payload = {"raw_response": response.text}

        if response.status_code >= 400:
            raise UnipileAPIError(
                f"Unipile API error: {response.status_code}",
                status_code=response.status_code,
                payload=payload
            )
        if not isinstance(payload, dict):
            raise UnipileAPIError("Unexpected Unipile response", response.status_code, payload)
        return payload

    # -------------------------------------------------------------------------
    # Hosted connect
    # -------------------------------------------------------------------------

    def get_connect_url(self) -> str:
        """Hosted page where Unipile performs the LinkedIn handshake."""
        query = urlencode({"provider": self.PROVIDER, "redirect_uri": self.config.redirect_uri})
        return f"{self.config.base_url}/users/connect?{query}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """Exchange the hosted-connect authorization code for an access token."""
        return await self._request(
            "POST",
            "/users/connect",
            json_data={
                "code": code,
                "provider": self.PROVIDER,
                "redirect_uri": self.config.redirect_uri
            }
        )

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    async def get_current_user(self, access_token: str) -> Dict[str, Any]:
        """Account record behind a user access token."""
        return await self._request("GET", "/users/me", access_token=access_token)

    async def get_account(self, account_id: str) -> Dict[str, Any]:
        """Account record by Unipile account id (API key only)."""
        return await self._request("GET", f"/accounts/{account_id}")

    # -------------------------------------------------------------------------
    # Messaging
    # -------------------------------------------------------------------------

    async def send_message(
        self,
        recipient_id: str,
        text: str,
        access_token: Optional[str] = None,
        account_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send a LinkedIn message.

        Args:
            recipient_id: Unipile/LinkedIn identifier of the recipient
            text: Message body, sent as-is
            access_token: User token, when the session carries one
            account_id: Sending account, when a fixed one is configured

        Returns:
            Raw Unipile response (contains the message id)
        """
        payload = {
            "provider": self.PROVIDER,
            "recipient_id": recipient_id,
            "text": text
        }
        if account_id:
            payload["account_id"] = account_id
        return await self._request("POST", "/messages", access_token=access_token, json_data=payload)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()


# =============================================================================
# FACTORY
# =============================================================================

_client: Optional[UnipileAPIClient] = None


def get_unipile_client() -> UnipileAPIClient:
    """Process-wide Unipile client, built from settings on first use."""
    global _client
    if _client is None:
        _client = UnipileAPIClient(UnipileConfig.from_settings())
        logger.info(f"Unipile client initialized for {_client.config.base_url}")
    return _client


async def close_unipile_client():
    global _client
    if _client is not None:
        await _client.close()
        _client = None
