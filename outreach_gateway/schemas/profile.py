"""
Profile schemas.
"""
from typing import Optional

from outreach_gateway.schemas.common import CamelModel

UNKNOWN = "Unknown"


class Profile(CamelModel):
    """Normalized projection of a vendor account record."""
    name: str = UNKNOWN
    job_title: str = UNKNOWN
    company: str = UNKNOWN
    industry: str = UNKNOWN
    profile_picture: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "jobTitle": "Head of Partnerships",
                "company": "Acme Corp",
                "industry": "Software",
                "profilePicture": None
            }
        }


class ProfileIdentifiers(CamelModel):
    """Platform identifiers of the account, any of which may be absent."""
    username: Optional[str] = None
    public_identifier: Optional[str] = None
    provider_id: Optional[str] = None
    account_id: Optional[str] = None


class ProfileResponse(CamelModel):
    profile: Profile
    identifiers: ProfileIdentifiers = ProfileIdentifiers()
