"""
OAuth Login Service.

Flow: authorization code -> provider access token -> provider profile ->
local member -> our access token. Nothing is written to the database
before the provider profile has been fetched, so a failing provider call
never leaves a partial member behind.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.config.constants import OAuthProvider
from shared.config.logging import audit_auth_event
from shared.security.auth import access_token_ttl_seconds, generate_access_token
from shared.utils.exceptions import OAuthExchangeFailedError
from shared.utils.schemas import LoginResponse, MemberOutput

from .registry import OAuthProviderRegistry
from .social_member_service import SocialMemberService


class OAuthLoginService:
    def __init__(self, db: Session, registry: OAuthProviderRegistry | None = None):
        self._registry = registry or OAuthProviderRegistry()
        self._social_members = SocialMemberService(db)

    def get_login_page_url(self, provider: str | OAuthProvider, state: str) -> str:
        return self._registry.get(provider).get_login_page_url(state)

    def login(self, provider: str | OAuthProvider, code: str) -> LoginResponse:
        """
        Complete an OAuth login.

        Raises:
            InvalidArgumentError: If the provider is not supported.
            OAuthExchangeFailedError: If any provider call fails.
            AlreadyExistsError: If the provider email belongs to another member.
        """
        client = self._registry.get(provider)
        try:
            provider_token = client.exchange_code(code)
            user_info = client.fetch_user_info(provider_token)
        except OAuthExchangeFailedError as e:
            audit_auth_event(
                "OAUTH_LOGIN",
                success=False,
                reason=e.step,
                provider=e.provider,
            )
            raise

        member = self._social_members.register_if_absent(user_info)
        audit_auth_event(
            "OAUTH_LOGIN",
            user_id=member.id,
            email=member.email,
            provider=user_info.provider,
        )
        return LoginResponse(
            access_token=generate_access_token(member.id, member.email),
            expires_in=access_token_ttl_seconds(),
            member=MemberOutput.model_validate(member),
        )
