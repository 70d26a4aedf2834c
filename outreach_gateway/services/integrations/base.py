"""
Base interfaces for integration providers.
Abstract base classes for the OAuth strategies and the session they produce.
"""
from abc import ABC, abstractmethod
from typing import Optional, Mapping
from urllib.parse import urlencode

from pydantic import BaseModel


class AuthSession(BaseModel):
    """A validated bearer credential, resolved once per request."""
    token: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    vendor_token: Optional[str] = None  # forwarded to Unipile as Bearer
    account_id: Optional[str] = None    # fixed Unipile account to look up


class AuthStrategy(ABC):
    """
    Base interface for the OAuth handshake.

    Every strategy ends at the frontend: `?token=...&user_id=...` on success,
    `?error=<marker>` on failure. Nothing is persisted server-side.
    """

    name: str = "base"
    failure_marker: str = "auth_failed"

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url

    @abstractmethod
    def authorization_url(self) -> str:
        """Where `GET /auth/linkedin` sends the browser."""
        pass

    @abstractmethod
    async def handle_callback(self, params: Mapping[str, str]) -> str:
        """Complete the handshake and return the frontend redirect URL. Never raises."""
        pass

    @abstractmethod
    def authenticate(self, token: str) -> AuthSession:
        """Validate a bearer credential. Raises UnauthorizedError."""
        pass

    async def close(self):
        """Release any HTTP clients held by the strategy."""
        pass

    def success_redirect(self, token: str, user_id: str) -> str:
        return self._frontend_redirect({"token": token, "user_id": user_id})

    def error_redirect(self, marker: Optional[str] = None) -> str:
        return self._frontend_redirect({"error": marker or self.failure_marker})

    def _frontend_redirect(self, params: dict) -> str:
        separator = "&" if "?" in self.frontend_url else "?"
        return f"{self.frontend_url}{separator}{urlencode(params)}"
