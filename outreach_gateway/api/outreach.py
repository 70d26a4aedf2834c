"""
Outreach API routes - profile, message generation and dispatch.
"""
from fastapi import APIRouter, Depends

from outreach_gateway.api.deps import (
    get_current_session,
    get_message_service,
    get_outreach_service,
    get_profile_service,
)
from outreach_gateway.schemas.common import ErrorResponse
from outreach_gateway.schemas.outreach import (
    GenerateMessageRequest, GenerateMessageResponse,
    SendMessageRequest, SendMessageResponse
)
from outreach_gateway.schemas.profile import ProfileResponse
from outreach_gateway.services.integrations.base import AuthSession
from outreach_gateway.services.message_service import MessageService
from outreach_gateway.services.outreach_service import OutreachService
from outreach_gateway.services.profile_service import ProfileService

router = APIRouter(
    prefix="/api",
    tags=["outreach"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    }
)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    session: AuthSession = Depends(get_current_session),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Fetch the connected LinkedIn profile."""
    return await profile_service.get_profile(session)


@router.post("/generate-message", response_model=GenerateMessageResponse)
async def generate_message(
    request: GenerateMessageRequest,
    message_service: MessageService = Depends(get_message_service)
):
    """Generate an outreach message for a profile (or a raw prompt)."""
    message = await message_service.generate_message(request)
    return GenerateMessageResponse(message=message)


@router.post("/send-message", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    session: AuthSession = Depends(get_current_session),
    outreach_service: OutreachService = Depends(get_outreach_service)
):
    """Send a message via Unipile."""
    return await outreach_service.send_message(session, request)
