"""
Outreach schemas - message generation and dispatch.
"""
from typing import Optional

from outreach_gateway.schemas.common import CamelModel


class ProfileInput(CamelModel):
    """Profile fields a message is generated for. Only `name` is required."""
    name: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    profile_picture: Optional[str] = None


class GenerateMessageRequest(CamelModel):
    """Generate from a profile, or from a caller-supplied prompt."""
    profile: Optional[ProfileInput] = None
    prompt: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "profile": {
                    "name": "Jane Doe",
                    "jobTitle": "Head of Partnerships",
                    "company": "Acme Corp",
                    "industry": "Software"
                }
            }
        }


class GenerateMessageResponse(CamelModel):
    message: str


class SendMessageRequest(CamelModel):
    """Send a message via Unipile. `recipientId` defaults to the session user."""
    message: str = ""
    recipient_id: Optional[str] = None


class SendMessageResponse(CamelModel):
    success: bool = True
    message_id: str
