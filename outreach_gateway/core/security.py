"""
Security utilities for the Outreach Gateway.
Session JWTs and stateless OAuth state tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Literal
import uuid

import jwt

from outreach_gateway.config import settings


# Token types
TokenType = Literal["access", "state"]


def create_token(
    data: dict,
    token_type: TokenType = "access",
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT token.

    Args:
        data: Payload data (sub plus any profile claims)
        token_type: 'access' for session tokens, 'state' for OAuth state
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    elif token_type == "state":
        expire = now + timedelta(minutes=settings.OAUTH_STATE_EXPIRE_MINUTES)
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": token_type,
        "jti": str(uuid.uuid4())
    })

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a session token."""
    return create_token(data, token_type="access", expires_delta=expires_delta)


def create_state_token(expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed OAuth `state` value; nothing is stored server-side."""
    return create_token({}, token_type="state", expires_delta=expires_delta)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def verify_token(token: str, token_type: TokenType = "access") -> Optional[dict]:
    """
    Verify a token and check its type.

    Returns:
        Decoded payload if valid and correct type, None otherwise
    """
    payload = decode_token(token)
    if payload and payload.get("type") == token_type:
        return payload
    return None
