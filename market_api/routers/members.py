"""
Member router.
Signup, profile reads and owner-only profile updates.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from market_api.services.domain import MemberService
from market_api.services.permissions import require_owner
from shared.infrastructure.db import get_db
from shared.security.auth import MemberContext, current_member_context
from shared.utils.schemas import (
    MemberOutput,
    PasswordCheckRequest,
    SignupRequest,
    UpdateMemberRequest,
)


router = APIRouter(prefix="/api/members", tags=["members"])


@router.post("/signup", response_model=MemberOutput, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, db: Session = Depends(get_db)) -> MemberOutput:
    """Register a member with email and password."""
    return MemberService(db).signup(
        email=body.email,
        raw_password=body.password,
        name=body.name,
        phone_number=body.phone_number,
        role=body.role,
    )


@router.get("/me", response_model=MemberOutput)
def get_me(
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> MemberOutput:
    return MemberService(db).get_current_member(ctx)


@router.get("/{member_id}", response_model=MemberOutput)
def get_member(
    member_id: int,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> MemberOutput:
    return MemberService(db).get_member(member_id)


@router.patch("/{member_id}", response_model=MemberOutput)
def update_member(
    member_id: int,
    body: UpdateMemberRequest,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> MemberOutput:
    """
    Partially update the caller's own profile.

    Fields left out (or null) are not touched. Changing the password to
    one of the last three passwords is rejected with 400.
    """
    require_owner(ctx, member_id, action="update this member")
    return MemberService(db).update_member(
        member_id,
        name=body.name,
        phone_number=body.phone_number,
        password=body.password,
    )


@router.post("/{member_id}/password-check", status_code=status.HTTP_204_NO_CONTENT)
def password_check(
    member_id: int,
    body: PasswordCheckRequest,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> None:
    """Confirm the caller's current password before a sensitive action."""
    require_owner(ctx, member_id, action="check this member's password")
    MemberService(db).password_check(member_id, body.password)
