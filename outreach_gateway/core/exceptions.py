"""
Custom exceptions for the Outreach Gateway.
Provides consistent error handling across the application.
"""
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class OutreachError(Exception):
    """Base exception for the Outreach Gateway"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class NotFoundError(OutreachError):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class UnauthorizedError(OutreachError):
    """Authentication failed"""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class ValidationError(OutreachError):
    """Validation failed"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class ExternalServiceError(OutreachError):
    """
    External service call failed.

    `message` is what the client sees. `details` is the upstream diagnostic
    payload, only rendered when the route asks for it. `extra` adds fields
    to the error body (e.g. an empty `message` for generation failures).
    """
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(
        self,
        message: str = "External service call failed",
        service: str = "External service",
        details: Any = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.service = service
        self.details = details
        self.extra = extra or {}
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body = {"error": self.message, **self.extra}
        if self.details is not None:
            body["details"] = self.details
        return body


async def outreach_error_handler(request: Request, exc: OutreachError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        detail = " ".join(part for part in (location, errors[0].get("msg", "")) if part)
        if detail:
            message = f"{message}: {detail}"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI):
    """Render every gateway error as an `{"error": ...}` body."""
    app.add_exception_handler(OutreachError, outreach_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
