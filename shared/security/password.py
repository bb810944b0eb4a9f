"""
Password hashing utilities using bcrypt.

Every credential write path (signup, password change, social registration)
goes through hash_password(); nothing stores raw passwords.
"""

import secrets

import bcrypt

from shared.config.constants import MAX_PASSWORD_BYTES
from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.exceptions import InvalidArgumentError

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.

    Returns:
        Hashed password string (includes salt and algorithm info).

    Raises:
        InvalidArgumentError: If the UTF-8 encoding exceeds the bcrypt limit.

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    if exceeds_bcrypt_limit(password):
        raise InvalidArgumentError(
            "password", None, reason=f"must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8"
        )
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Non-bcrypt stored values are rejected outright; a raw stored password
    never verifies, even against itself. Candidates over the bcrypt limit
    cannot match any stored hash.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning(
            "SECURITY: Non-bcrypt password hash detected. "
            "All stored credentials must be migrated to bcrypt."
        )
        return False

    if exceeds_bcrypt_limit(plain_password):
        return False

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def exceeds_bcrypt_limit(password: str) -> bool:
    """bcrypt refuses inputs longer than 72 bytes."""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def needs_rehash(hashed_password: str) -> bool:
    """Check if a stored value is not a bcrypt hash and must be rehashed."""
    return not hashed_password.startswith(BCRYPT_PREFIXES)


def generate_placeholder_password() -> str:
    """
    Random credential for members that only ever log in through a provider.
    Nobody knows the value, so it can never be used for a local login.
    """
    return secrets.token_urlsafe(32)
