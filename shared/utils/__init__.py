"""
Utilities module: Exceptions, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    AlreadyExistsError,
    ReusedCredentialError,
    InvalidCredentialsError,
    InvalidArgumentError,
    OAuthExchangeFailedError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
    ConflictError,
)

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "AlreadyExistsError",
    "ReusedCredentialError",
    "InvalidCredentialsError",
    "InvalidArgumentError",
    "OAuthExchangeFailedError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
]
