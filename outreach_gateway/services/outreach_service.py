"""
Outreach service - deliver a message through Unipile.

Single forwarding call: no retry and no idempotency key, so a client retrying
after a timeout can deliver the same message twice.
"""
import logging

from outreach_gateway.core.exceptions import ExternalServiceError, ValidationError
from outreach_gateway.schemas.outreach import SendMessageRequest, SendMessageResponse
from outreach_gateway.services.integrations.base import AuthSession
from outreach_gateway.services.integrations.unipile import UnipileAPIClient, UnipileAPIError

logger = logging.getLogger(__name__)


class OutreachService:
    """Service for outreach operations."""

    def __init__(self, client: UnipileAPIClient):
        self.client = client

    async def send_message(self, session: AuthSession, request: SendMessageRequest) -> SendMessageResponse:
        """Send the message to the recipient (default: the session user)."""
        if not request.message or not request.message.strip():
            raise ValidationError("Message is required", field="message")

        recipient_id = request.recipient_id or session.user_id
        if not recipient_id:
            raise ValidationError("Recipient is required", field="recipientId")

        try:
            result = await self.client.send_message(
                recipient_id=recipient_id,
                text=request.message,
                access_token=session.vendor_token,
                account_id=session.account_id
            )
        except UnipileAPIError as e:
            logger.error(f"Send message error: {e} {e.payload}")
            raise ExternalServiceError("Failed to send message", service="Unipile")

        message_id = result.get("id") or result.get("message_id")
        if not message_id:
            logger.error(f"Unipile accepted the message but returned no id: {result}")
            raise ExternalServiceError("Failed to send message", service="Unipile")

        logger.info(f"Message {message_id} sent to {recipient_id}")
        return SendMessageResponse(success=True, message_id=str(message_id))
