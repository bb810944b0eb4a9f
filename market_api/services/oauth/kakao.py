from __future__ import annotations

from typing import Any

from shared.config.constants import OAuthProvider

from .base import OAuthClient


class KakaoOAuthClient(OAuthClient):
    provider = OAuthProvider.KAKAO

    authorize_path = "/oauth/authorize"
    token_path = "/oauth/token"
    user_info_path = "/v2/user/me"

    def _parse_user_info(self, payload: dict[str, Any]) -> dict[str, Any]:
        kakao_account = payload.get("kakao_account") or {}
        profile = kakao_account.get("profile") or {}
        email = kakao_account["email"]
        return {
            "external_id": str(payload["id"]),
            "email": email,
            "name": profile.get("nickname") or email,
        }
