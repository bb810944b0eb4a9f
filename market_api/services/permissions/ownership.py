"""
Ownership checks shared by every domain that stores a member_id.

Usage:
    from market_api.services.permissions import match_member_id, require_owner

    if not match_member_id(ctx, product.member_id):
        ...
    require_owner(ctx, product.member_id, action="update this product")
"""

from shared.config.logging import get_logger
from shared.security.auth import MemberContext
from shared.utils.exceptions import ForbiddenError

logger = get_logger(__name__)


def match_member_id(ctx: MemberContext | None, owner_id: int | None) -> bool:
    """
    True only when the authenticated caller is the owner.

    Never raises; an anonymous caller or a missing owner is simply not a match.
    """
    if ctx is None or owner_id is None:
        return False
    return ctx.member_id == owner_id


def require_owner(ctx: MemberContext, owner_id: int, action: str | None = None) -> None:
    """
    Raise ForbiddenError unless the caller owns the resource.
    """
    if not match_member_id(ctx, owner_id):
        raise ForbiddenError(
            action,
            member_id=ctx.member_id if ctx else None,
            owner_id=owner_id,
        )
