"""
Authentication router.
Handles email/password login.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from market_api.services.domain import MemberService
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter, LOGIN_RATE_LIMIT
from shared.utils.schemas import LoginRequest, LoginResponse


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate a member and return an access token.

    The token contains:
    - sub: member ID
    - email: member's email

    Unknown email and wrong password both return 401 with the same message.
    Rate limited per client IP to slow down credential stuffing.
    """
    return MemberService(db).login(body.email, body.password)
