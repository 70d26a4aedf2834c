"""
HTTP client for the gateway endpoints the wizard drives.
"""
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Gateway answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class GatewayClient:
    """
    Synchronous gateway client.

    Pass `http` to reuse an existing httpx.Client (any client whose base URL
    points at the gateway, e.g. a test client).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        http: Optional[httpx.Client] = None,
        timeout: float = 60.0
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.base_url = str(self.http.base_url).rstrip("/")

    def login_url(self) -> str:
        """Gateway entry point the browser navigates to."""
        return f"{self.base_url}/auth/linkedin"

    def _call(self, method: str, path: str, token: Optional[str] = None, json: Optional[dict] = None) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Gateway {method} {path} failed: {e}")
            raise GatewayError(f"Gateway unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise GatewayError(message or f"Gateway error {response.status_code}", response.status_code)
        return data

    def fetch_profile(self, token: str) -> Dict[str, Any]:
        """`{"profile": {...}, "identifiers": {...}}`"""
        return self._call("GET", "/api/profile", token=token)

    def generate_message(self, profile: Dict[str, Any], token: Optional[str] = None) -> str:
        return self._call("POST", "/api/generate-message", token=token, json={"profile": profile})["message"]

    def send_message(self, message: str, recipient_id: str, token: str) -> Dict[str, Any]:
        """`{"success": true, "messageId": ...}`"""
        return self._call(
            "POST",
            "/api/send-message",
            token=token,
            json={"message": message, "recipientId": recipient_id}
        )

    def close(self):
        self.http.close()
