"""
Authentication utilities.
Issues and validates the signed bearer tokens that identify members.

Tokens are HS256 JWTs signed with the process-wide secret from settings.
Validation is stateless (signature + expiry + issuer/audience) and fails
closed: anything that does not fully verify is rejected.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any

import jwt
from fastapi import Header

from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.constants import TokenType
from shared.config.logging import get_logger
from shared.utils.exceptions import UnauthorizedError

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "email", "iat", "exp", "iss", "aud"]


@dataclass(frozen=True)
class MemberContext:
    """Identity of the authenticated caller, derived from a validated token."""

    member_id: int
    email: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "MemberContext":
        return cls(member_id=int(claims["sub"]), email=claims.get("email", ""))


# =============================================================================
# Token issuance
# =============================================================================


def access_token_ttl_seconds() -> int:
    return settings.jwt_access_token_expire_minutes * 60


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
    token_type: str = TokenType.ACCESS,
) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.
        token_type: Value of the ``type`` claim.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = access_token_ttl_seconds()

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": token_type,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm=JWT_ALGORITHM)


def generate_access_token(member_id: int, email: str, ttl_seconds: int | None = None) -> str:
    """Issue an access token whose subject is the member id."""
    return sign_jwt({"sub": str(member_id), "email": email}, ttl_seconds=ttl_seconds)


# =============================================================================
# Token validation
# =============================================================================


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Args:
        token: The JWT token string.

    Returns:
        Decoded token claims.

    Raises:
        UnauthorizedError: If the token is malformed, tampered, expired,
            issued for another audience, or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        # Generic message to the client, the reason only goes to the log
        logger.warning("JWT validation failed", error=str(e))
        raise UnauthorizedError("Invalid token")

    if payload.get("type") != TokenType.ACCESS:
        raise UnauthorizedError("Invalid token: invalid type claim")

    try:
        int(payload["sub"])
    except (ValueError, TypeError):
        raise UnauthorizedError("Invalid token: malformed subject claim")

    return payload


def verify_access_token(token: str) -> int:
    """Validate a token and return the member id it was issued for."""
    return int(verify_jwt(token)["sub"])


def get_member_id_from_token(token: str | None) -> int | None:
    """
    Non-raising variant of verify_access_token().

    Returns:
        The member id, or None when no valid token was supplied.
    """
    if not token:
        return None
    try:
        return verify_access_token(token)
    except UnauthorizedError:
        return None


# =============================================================================
# Request helpers
# =============================================================================


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        UnauthorizedError: If header is missing or malformed.
    """
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()


def current_member_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> MemberContext:
    """
    FastAPI dependency resolving the caller's identity from the bearer token.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx: MemberContext = Depends(current_member_context)):
            member_id = ctx.member_id
    """
    token = get_bearer_token(authorization)
    return MemberContext.from_claims(verify_jwt(token))

