"""
API dependencies - shared across all routes.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from outreach_gateway.core.exceptions import UnauthorizedError
from outreach_gateway.services.auth_service import get_auth_strategy
from outreach_gateway.services.integrations.base import AuthSession, AuthStrategy
from outreach_gateway.services.integrations.unipile import UnipileAPIClient, get_unipile_client
from outreach_gateway.services.message_service import (
    GeminiMessageGenerator,
    MessageService,
    get_message_generator,
)
from outreach_gateway.services.outreach_service import OutreachService
from outreach_gateway.services.profile_service import ProfileService


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    strategy: AuthStrategy = Depends(get_auth_strategy)
) -> AuthSession:
    """Resolve the bearer token through the active auth strategy."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")
    return strategy.authenticate(credentials.credentials)


def get_profile_service(client: UnipileAPIClient = Depends(get_unipile_client)) -> ProfileService:
    return ProfileService(client)


def get_outreach_service(client: UnipileAPIClient = Depends(get_unipile_client)) -> OutreachService:
    return OutreachService(client)


def get_message_service(
    generator: GeminiMessageGenerator = Depends(get_message_generator)
) -> MessageService:
    return MessageService(generator)
