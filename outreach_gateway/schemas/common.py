"""
Common schemas used across multiple endpoints.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Error response."""
    error: str

    class Config:
        json_schema_extra = {"example": {"error": "Failed to fetch profile"}}


class HealthResponse(CamelModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    auth_strategy: str = "unipile"


class AuthUrlResponse(CamelModel):
    """OAuth entry point for clients that navigate themselves."""
    auth_url: str
