"""
OAuth2 router.
Redirects to the provider login page and completes the code callback.
"""

import secrets

from fastapi import APIRouter, Cookie, Depends, Query, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from market_api.services.oauth import OAuthLoginService
from shared.infrastructure.db import get_db
from shared.utils.exceptions import InvalidArgumentError
from shared.utils.schemas import LoginResponse


router = APIRouter(prefix="/api/oauth2", tags=["oauth2"])

STATE_COOKIE = "oauth_state"
STATE_COOKIE_MAX_AGE = 600  # seconds the provider login page may take


def get_oauth_login_service(db: Session = Depends(get_db)) -> OAuthLoginService:
    return OAuthLoginService(db)


@router.get("/login/{provider}")
def redirect_to_login_page(
    provider: str,
    service: OAuthLoginService = Depends(get_oauth_login_service),
) -> RedirectResponse:
    """
    Send the browser to the provider's login page.

    A random state is stored in a short-lived HttpOnly cookie and checked
    again on the callback.
    """
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(service.get_login_page_url(provider, state))
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        httponly=True,
        samesite="lax",
        max_age=STATE_COOKIE_MAX_AGE,
        path="/api/oauth2",
    )
    return response


@router.get("/callback/{provider}", response_model=LoginResponse)
def callback(
    provider: str,
    response: Response,
    code: str = Query(..., min_length=1),
    state: str | None = Query(default=None),
    oauth_state: str | None = Cookie(default=None),
    service: OAuthLoginService = Depends(get_oauth_login_service),
) -> LoginResponse:
    """
    Exchange the authorization code and log the member in.

    The state returned by the provider must match the cookie set by
    /login/{provider}; a missing cookie or state is rejected.
    """
    if not oauth_state or not state or not secrets.compare_digest(
        state.encode("utf-8"), oauth_state.encode("utf-8")
    ):
        raise InvalidArgumentError("state", state, reason="does not match the login request")

    result = service.login(provider, code)
    response.delete_cookie(key=STATE_COOKIE, path="/api/oauth2")
    return result
