"""
Rate limiting utilities using slowapi.
Protects the credential endpoints from brute force and credential stuffing.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from shared.config.settings import settings
from shared.config.logging import get_logger, security_audit_logger

logger = get_logger(__name__)

# Create limiter instance using client IP as key
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Usage: @limiter.limit(LOGIN_RATE_LIMIT) on login-like endpoints
LOGIN_RATE_LIMIT = f"{settings.login_rate_limit}/minute"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.
    Returns a JSON response with retry information.
    """
    client_ip = get_remote_address(request)
    security_audit_logger.warning(
        "RATE_LIMIT_AUDIT: login",
        path=request.url.path,
        ip_address=client_ip,
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Try again later.",
            "limit": str(exc.detail),
        },
        headers={"Retry-After": "60"},
    )
