"""
Auth service - the two OAuth strategies and the factory that picks one.

`unipile`:  Unipile's hosted connect page performs the LinkedIn handshake and
            hands back a code; the Unipile access token becomes the session token.
`linkedin`: direct LinkedIn OAuth; the gateway mints its own session JWT.
"""
import logging
from typing import Optional, Mapping

from outreach_gateway.config import settings
from outreach_gateway.core.exceptions import UnauthorizedError
from outreach_gateway.core.security import create_access_token, create_state_token, verify_token
from outreach_gateway.services.integrations.base import AuthStrategy, AuthSession
from outreach_gateway.services.integrations.linkedin import LinkedInAPIClient, LinkedInConfig
from outreach_gateway.services.integrations.unipile import UnipileAPIClient, get_unipile_client

logger = logging.getLogger(__name__)


class UnipileRelayStrategy(AuthStrategy):
    """Relay the Unipile hosted-connect flow back to the frontend."""

    name = "unipile"
    failure_marker = "auth_failed"

    def __init__(self, client: UnipileAPIClient, frontend_url: str):
        super().__init__(frontend_url)
        self.client = client

    def authorization_url(self) -> str:
        return self.client.get_connect_url()

    async def handle_callback(self, params: Mapping[str, str]) -> str:
        code = params.get("code")
        if not code:
            logger.warning("Unipile callback without authorization code")
            return self.error_redirect()

        try:
            data = await self.client.exchange_code(code)
        except Exception as e:
            logger.error(f"Unipile code exchange failed: {e} {getattr(e, 'payload', '')}")
            return self.error_redirect()

        access_token = data.get("access_token")
        user_id = data.get("user_id")
        if not access_token or not user_id:
            logger.error(f"Unipile code exchange returned no token/user id: {sorted(data)}")
            return self.error_redirect()

        logger.info(f"Unipile account connected for user {user_id}")
        return self.success_redirect(access_token, str(user_id))

    def authenticate(self, token: str) -> AuthSession:
        if not token:
            raise UnauthorizedError("No token provided")
        # Opaque vendor token; Unipile itself validates it on every call
        return AuthSession(
            token=token,
            vendor_token=token,
            account_id=self.client.config.account_id
        )


class LinkedInOAuthStrategy(AuthStrategy):
    """Direct LinkedIn OAuth with a gateway-signed session JWT."""

    name = "linkedin"
    failure_marker = "callback_failed"

    def __init__(
        self,
        client: LinkedInAPIClient,
        frontend_url: str,
        account_id: Optional[str] = None
    ):
        super().__init__(frontend_url)
        self.client = client
        self.account_id = account_id

    def authorization_url(self) -> str:
        return self.client.get_auth_url(create_state_token())

    async def handle_callback(self, params: Mapping[str, str]) -> str:
        if params.get("error"):
            logger.warning(
                f"LinkedIn denied authorization: {params.get('error')} {params.get('error_description', '')}"
            )
            return self.error_redirect("linkedin_auth_failed")

        code = params.get("code")
        state = params.get("state")
        if not code or not state or not verify_token(state, "state"):
            logger.warning("LinkedIn callback with missing code or invalid state")
            return self.error_redirect("linkedin_auth_failed")

        try:
            token_data = await self.client.exchange_code_for_token(code)
            access_token = token_data["access_token"]
            profile = await self.client.get_current_profile(access_token)
            email = await self.client.get_email(access_token)
            linkedin_id = profile.get("id")
            display_name = f"{profile.get('localizedFirstName', '')} {profile.get('localizedLastName', '')}".strip()
        except Exception as e:
            logger.error(f"LinkedIn callback failed: {e} {getattr(e, 'payload', '')}")
            return self.error_redirect()

        if not linkedin_id:
            logger.error("LinkedIn profile has no id")
            return self.error_redirect()

        token = create_access_token({
            "sub": str(linkedin_id),
            "name": display_name or None,
            "email": email
        })

        logger.info(f"LinkedIn member {linkedin_id} authenticated")
        return self.success_redirect(token, str(linkedin_id))

    def authenticate(self, token: str) -> AuthSession:
        payload = verify_token(token, "access")
        if not payload or not payload.get("sub"):
            raise UnauthorizedError("Invalid or expired token")
        return AuthSession(
            token=token,
            user_id=payload["sub"],
            name=payload.get("name"),
            email=payload.get("email"),
            account_id=self.account_id
        )

    async def close(self):
        await self.client.close()


# =============================================================================
# FACTORY
# =============================================================================

_strategy: Optional[AuthStrategy] = None


def build_auth_strategy(name: str) -> AuthStrategy:
    """Build the strategy named by AUTH_STRATEGY."""
    if name == UnipileRelayStrategy.name:
        return UnipileRelayStrategy(get_unipile_client(), settings.FRONTEND_URL)
    if name == LinkedInOAuthStrategy.name:
        return LinkedInOAuthStrategy(
            LinkedInAPIClient(LinkedInConfig.from_settings()),
            settings.FRONTEND_URL,
            account_id=settings.UNIPILE_ACCOUNT_ID or None
        )
    raise ValueError(f"Unknown AUTH_STRATEGY '{name}' (expected 'unipile' or 'linkedin')")


def get_auth_strategy() -> AuthStrategy:
    """Process-wide auth strategy, built from settings on first use."""
    global _strategy
    if _strategy is None:
        _strategy = build_auth_strategy(settings.AUTH_STRATEGY)
        logger.info(f"Auth strategy initialized: {_strategy.name}")
    return _strategy


async def close_auth_strategy():
    global _strategy
    if _strategy is not None:
        await _strategy.close()
        _strategy = None
