"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, get_settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    MemberRole,
    OAuthProvider,
    Limits,
    PASSWORD_HISTORY_SIZE,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "MemberRole",
    "OAuthProvider",
    "Limits",
    "PASSWORD_HISTORY_SIZE",
]
