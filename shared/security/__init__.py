"""
Security module: Token issuance/validation, password hashing, password history, rate limiting.
"""

from shared.security.auth import (
    MemberContext,
    sign_jwt,
    generate_access_token,
    verify_jwt,
    verify_access_token,
    get_member_id_from_token,
    get_bearer_token,
    current_member_context,
)
from shared.security.password import hash_password, verify_password
from shared.security.password_history import check_reuse, insert, new_history
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "MemberContext",
    "sign_jwt",
    "generate_access_token",
    "verify_jwt",
    "verify_access_token",
    "get_member_id_from_token",
    "get_bearer_token",
    "current_member_context",
    # password
    "hash_password",
    "verify_password",
    # password history
    "check_reuse",
    "insert",
    "new_history",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
