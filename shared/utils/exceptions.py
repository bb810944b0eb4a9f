"""
Centralized HTTP exceptions for consistent error handling.

Each failure kind of the identity core is a distinct exception class, so
callers can catch precisely what they expect while the HTTP layer still
renders a proper status code without any extra mapping.

Usage:
    from shared.utils.exceptions import NotFoundError, AlreadyExistsError

    raise NotFoundError("Member", member_id)
    raise AlreadyExistsError("email", email)
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Member", 123)
        raise NotFoundError("Product", product_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 401 / 403 Authentication and Authorization Errors
# =============================================================================


class UnauthorizedError(AppException):
    """
    Missing, malformed, expired or otherwise invalid bearer token (401).
    """

    def __init__(
        self,
        detail: str = "Invalid token",
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        **log_context: Any,
    ):
        headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
        super().__init__(
            status_code=status_code,
            detail=detail,
            log_level="warning",
            headers=headers,
            **log_context,
        )


class ForbiddenError(UnauthorizedError):
    """
    Authenticated caller does not own the resource (403).

    Usage:
        raise ForbiddenError("update this product", member_id=ctx.member_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not allowed to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            detail=detail,
            status_code=status.HTTP_403_FORBIDDEN,
            action=action,
            **log_context,
        )


class InvalidCredentialsError(AppException):
    """
    Login or password-check mismatch (401).

    The message never says whether the email or the password was wrong.
    """

    def __init__(self, detail: str = "Invalid email or password", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Price must be positive")
        raise ValidationError("Invalid quantity", field="quantity", value=-1)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidArgumentError(ValidationError):
    """Malformed input such as an unknown role or provider."""

    def __init__(self, field: str, value: Any, reason: str | None = None, **log_context: Any):
        detail = f"Invalid value for '{field}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail, field=field, value=value, **log_context)


class ReusedCredentialError(ValidationError):
    """The requested password matches one of the recently used passwords."""

    def __init__(self, **log_context: Any):
        super().__init__("A previously used password cannot be reused", **log_context)


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Member was modified concurrently")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class AlreadyExistsError(ConflictError):
    """Uniqueness violation (email, phone number)."""

    def __init__(self, field: str, value: str | None = None, **log_context: Any):
        super().__init__(f"A member with this {field} already exists", field=field, **log_context)


# =============================================================================
# 5xx Errors
# =============================================================================


class ExternalServiceError(AppException):
    """External service error (502 or 503)."""

    def __init__(
        self,
        service: str,
        is_unavailable: bool = False,
        retry_after: int | None = None,
        **log_context: Any,
    ):
        if is_unavailable:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            detail = f"Service {service} temporarily unavailable"
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
            detail = f"Error communicating with {service}"

        headers = None
        if retry_after:
            headers = {"Retry-After": str(retry_after)}

        super().__init__(
            status_code=status_code,
            detail=detail,
            log_level="error",
            headers=headers,
            service=service,
            **log_context,
        )


class OAuthExchangeFailedError(ExternalServiceError):
    """Any failing step while talking to an OAuth provider."""

    def __init__(self, provider: str, step: str, reason: str | None = None, **log_context: Any):
        self.provider = provider
        self.step = step
        super().__init__(
            f"{provider} OAuth",
            step=step,
            reason=reason,
            **log_context,
        )
