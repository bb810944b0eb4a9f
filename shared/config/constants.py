"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import MemberRole, PASSWORD_HISTORY_SIZE

    role = MemberRole.parse(request.role)
"""

from enum import Enum
from typing import Final


# =============================================================================
# Member Roles
# =============================================================================


class MemberRole(str, Enum):
    """Closed set of member roles, fixed at signup."""

    BUSINESS = "BUSINESS"
    CUSTOMER = "CUSTOMER"

    @classmethod
    def parse(cls, value: "str | MemberRole") -> "MemberRole":
        """
        Parse free-text role input.

        Raises:
            ValueError: If the value is not one of the recognized roles.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None


# =============================================================================
# OAuth Providers
# =============================================================================


class OAuthProvider(str, Enum):
    """Supported third-party login providers."""

    NAVER = "NAVER"
    KAKAO = "KAKAO"


# =============================================================================
# Credential Policy
# =============================================================================

# Number of credential hashes retained to block reuse (current one included)
PASSWORD_HISTORY_SIZE: Final[int] = 3

MIN_PASSWORD_LENGTH: Final[int] = 4
MAX_PASSWORD_BYTES: Final[int] = 72  # bcrypt limit, counted on the UTF-8 encoding


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Price limits
    MIN_PRICE: Final[int] = 0
    MAX_PRICE: Final[int] = 100_000_000

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_PHONE_LENGTH: Final[int] = 20

    # Pagination
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100


# =============================================================================
# Token Types
# =============================================================================


class TokenType:
    """JWT ``type`` claim values."""

    ACCESS: Final[str] = "access"
