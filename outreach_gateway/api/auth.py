"""
OAuth routes.
Entry redirect and callbacks for whichever strategy AUTH_STRATEGY selects.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from outreach_gateway.schemas.common import AuthUrlResponse
from outreach_gateway.services.auth_service import get_auth_strategy
from outreach_gateway.services.integrations.base import AuthStrategy


router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/linkedin")
async def start_linkedin_auth(
    mode: Optional[str] = Query(default=None),
    strategy: AuthStrategy = Depends(get_auth_strategy)
):
    """
    Begin OAuth.

    Redirects the browser to the provider. With `?mode=json` returns
    `{"authUrl": ...}` instead, for clients that navigate themselves.
    """
    auth_url = strategy.authorization_url()
    if mode == "json":
        return AuthUrlResponse(auth_url=auth_url)
    return RedirectResponse(url=auth_url)


@router.get("/callback")
@router.get("/linkedin/callback")
async def oauth_callback(
    request: Request,
    strategy: AuthStrategy = Depends(get_auth_strategy)
):
    """Complete OAuth and send the browser back to the frontend."""
    redirect_url = await strategy.handle_callback(request.query_params)
    return RedirectResponse(url=redirect_url)
