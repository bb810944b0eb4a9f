from __future__ import annotations

from collections.abc import Mapping

import httpx

from shared.config.constants import OAuthProvider
from shared.config.settings import Settings, get_settings
from shared.utils.exceptions import InvalidArgumentError

from .base import OAuthClient
from .kakao import KakaoOAuthClient
from .naver import NaverOAuthClient


class OAuthProviderRegistry:
    """Maps OAuthProvider values to configured clients."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.settings = settings or get_settings()
        self._http_client = http_client
        self.clients: Mapping[OAuthProvider, OAuthClient] = self._build()

    def _build(self) -> Mapping[OAuthProvider, OAuthClient]:
        s = self.settings
        return {
            OAuthProvider.NAVER: NaverOAuthClient(
                client_id=s.naver_client_id,
                client_secret=s.naver_client_secret,
                redirect_url=s.naver_redirect_url,
                auth_server_base_url=s.naver_auth_server_base_url,
                resource_server_base_url=s.naver_resource_server_base_url,
                http_client=self._http_client,
            ),
            OAuthProvider.KAKAO: KakaoOAuthClient(
                client_id=s.kakao_client_id,
                client_secret=s.kakao_client_secret,
                redirect_url=s.kakao_redirect_url,
                auth_server_base_url=s.kakao_auth_server_base_url,
                resource_server_base_url=s.kakao_resource_server_base_url,
                http_client=self._http_client,
            ),
        }

    @staticmethod
    def parse_provider(provider: str | OAuthProvider) -> OAuthProvider:
        """
        Raises:
            InvalidArgumentError: If the provider is not supported.
        """
        if isinstance(provider, OAuthProvider):
            return provider
        try:
            return OAuthProvider(str(provider).strip().upper())
        except ValueError:
            raise InvalidArgumentError(
                "provider",
                provider,
                reason=f"supported providers: {', '.join(p.value for p in OAuthProvider)}",
            )

    def get(self, provider: str | OAuthProvider) -> OAuthClient:
        return self.clients[self.parse_provider(provider)]
