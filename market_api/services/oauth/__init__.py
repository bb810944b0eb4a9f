"""
OAuth bridge: provider clients, provider registry and social login.

Usage:
    from market_api.services.oauth import OAuthLoginService

    token = OAuthLoginService(db).login("naver", code)
"""

from .base import OAuthClient
from .http import get_http_client, close_http_client
from .kakao import KakaoOAuthClient
from .login_service import OAuthLoginService
from .naver import NaverOAuthClient
from .registry import OAuthProviderRegistry
from .social_member_service import SocialMemberService

__all__ = [
    "OAuthClient",
    "NaverOAuthClient",
    "KakaoOAuthClient",
    "OAuthProviderRegistry",
    "SocialMemberService",
    "OAuthLoginService",
    "get_http_client",
    "close_http_client",
]
