"""
Profile service - fetch the connected Unipile account and normalize it.
"""
import logging
from typing import Any, Dict, Optional

from outreach_gateway.core.exceptions import ExternalServiceError, NotFoundError
from outreach_gateway.schemas.profile import Profile, ProfileIdentifiers, ProfileResponse, UNKNOWN
from outreach_gateway.services.integrations.base import AuthSession
from outreach_gateway.services.integrations.unipile import UnipileAPIClient, UnipileAPIError

logger = logging.getLogger(__name__)

LINKEDIN_PLATFORM = "linkedin"


def _dig(data: Dict[str, Any], *paths: str) -> Optional[Any]:
    """First non-empty value among dotted paths, e.g. 'current_company.name'."""
    for path in paths:
        value: Any = data
        for key in path.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(data: Dict[str, Any], *paths: str) -> str:
    value = _dig(data, *paths)
    return str(value) if value is not None else UNKNOWN


def _full_name(data: Dict[str, Any]) -> str:
    name = _dig(data, "name", "display_name")
    if name:
        return str(name)
    parts = [_dig(data, "first_name"), _dig(data, "last_name")]
    joined = " ".join(str(p) for p in parts if p)
    return joined or _text(data, "connection_params.im.username", "username")


def is_linkedin_account(account: Dict[str, Any]) -> bool:
    platform = _dig(account, "type", "provider")
    return isinstance(platform, str) and platform.lower() == LINKEDIN_PLATFORM


def normalize_profile(account: Dict[str, Any]) -> ProfileResponse:
    """Map a Unipile account record onto the normalized profile shape."""
    picture = _dig(account, "profile_picture", "profile_picture_url", "picture_url")
    profile = Profile(
        name=_full_name(account),
        job_title=_text(account, "job_title", "headline", "occupation"),
        company=_text(account, "company", "current_company.name", "company_name"),
        industry=_text(account, "industry", "current_company.industry"),
        profile_picture=str(picture) if picture else None
    )

    def _ident(*paths: str) -> Optional[str]:
        value = _dig(account, *paths)
        return str(value) if value is not None else None

    identifiers = ProfileIdentifiers(
        username=_ident("username", "connection_params.im.username"),
        public_identifier=_ident("public_identifier", "connection_params.im.publicIdentifier"),
        provider_id=_ident("provider_id", "connection_params.im.id"),
        account_id=_ident("account_id", "id")
    )
    return ProfileResponse(profile=profile, identifiers=identifiers)


class ProfileService:
    """Service for profile retrieval."""

    def __init__(self, client: UnipileAPIClient):
        self.client = client

    async def get_profile(self, session: AuthSession) -> ProfileResponse:
        """
        Fetch the session's LinkedIn account from Unipile.

        A configured account id is looked up directly with the API key;
        otherwise the user's own token resolves `/users/me`.
        """
        try:
            if session.account_id:
                account = await self.client.get_account(session.account_id)
            elif session.vendor_token:
                account = await self.client.get_current_user(session.vendor_token)
            else:
                raise ExternalServiceError(
                    "Failed to fetch profile",
                    service="Unipile",
                    details={"error": "No Unipile account configured for this session"}
                )
        except UnipileAPIError as e:
            logger.error(f"Profile fetch error: {e} {e.payload}")
            raise ExternalServiceError("Failed to fetch profile", service="Unipile", details=e.payload)

        if not is_linkedin_account(account):
            logger.warning(f"Account platform is {_dig(account, 'type', 'provider')!r}, not LinkedIn")
            raise NotFoundError("LinkedIn account")

        return normalize_profile(account)
