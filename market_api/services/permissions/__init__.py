"""
Authorization helpers.
"""

from shared.security.auth import MemberContext

from .ownership import match_member_id, require_owner

__all__ = [
    "MemberContext",
    "match_member_id",
    "require_owner",
]
