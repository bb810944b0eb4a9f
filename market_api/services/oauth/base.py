"""
Base class for OAuth provider clients.

A client knows three things about its provider: where the login page is,
how to trade an authorization code for an access token, and how to turn
that token into a normalized OAuthUserInfo. Every failure on the way
(transport error, timeout, non-2xx, unreadable body, missing field) is
raised as OAuthExchangeFailedError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError as PydanticValidationError

from shared.config.constants import OAuthProvider
from shared.config.logging import oauth_logger as logger
from shared.utils.exceptions import OAuthExchangeFailedError
from shared.utils.schemas import OAuthUserInfo

from .http import get_http_client

# Steps reported in OAuthExchangeFailedError.step
STEP_TOKEN = "token_exchange"
STEP_USER_INFO = "user_info"


class OAuthClient(ABC):
    """Provider-agnostic authorization-code flow."""

    provider: OAuthProvider

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        auth_server_base_url: str,
        resource_server_base_url: str,
        http_client: httpx.Client | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_url = redirect_url
        self.auth_server_base_url = auth_server_base_url.rstrip("/")
        self.resource_server_base_url = resource_server_base_url.rstrip("/")
        self._http_client = http_client

    @property
    def http(self) -> httpx.Client:
        return self._http_client or get_http_client()

    # =========================================================================
    # Provider-specific parts
    # =========================================================================

    @property
    @abstractmethod
    def authorize_path(self) -> str: ...

    @property
    @abstractmethod
    def token_path(self) -> str: ...

    @property
    @abstractmethod
    def user_info_path(self) -> str: ...

    @abstractmethod
    def _parse_user_info(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Map the provider's profile body to OAuthUserInfo fields."""

    # =========================================================================
    # Flow
    # =========================================================================

    def get_login_page_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_url,
            "state": state,
        }
        return f"{self.auth_server_base_url}{self.authorize_path}?{urlencode(params)}"

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for the provider's access token."""
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_url,
            "code": code,
        }
        payload = self._request(
            STEP_TOKEN,
            "POST",
            f"{self.auth_server_base_url}{self.token_path}",
            data=data,
        )
        access_token = payload.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise self._failure(
                STEP_TOKEN,
                payload.get("error_description") or payload.get("error") or "missing access_token",
            )
        return access_token

    def fetch_user_info(self, access_token: str) -> OAuthUserInfo:
        """Fetch and normalize the profile the access token grants access to."""
        payload = self._request(
            STEP_USER_INFO,
            "GET",
            f"{self.resource_server_base_url}{self.user_info_path}",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        try:
            fields = self._parse_user_info(payload)
            return OAuthUserInfo(provider=self.provider.value, **fields)
        except (KeyError, TypeError, AttributeError, PydanticValidationError) as e:
            raise self._failure(STEP_USER_INFO, f"incomplete profile: {type(e).__name__}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _request(self, step: str, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.TimeoutException:
            raise self._failure(step, "timeout")
        except httpx.HTTPError as e:
            raise self._failure(step, f"transport error: {type(e).__name__}")

        if response.is_error:
            raise self._failure(step, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise self._failure(step, "response body is not JSON")
        if not isinstance(payload, dict):
            raise self._failure(step, "unexpected response body")
        return payload

    def _failure(self, step: str, reason: str) -> OAuthExchangeFailedError:
        logger.warning(
            "OAUTH_LOGIN_FAILED",
            provider=self.provider.value,
            step=step,
            reason=reason,
        )
        return OAuthExchangeFailedError(self.provider.value, step, reason=reason)
