from __future__ import annotations

from typing import Any

from shared.config.constants import OAuthProvider

from .base import OAuthClient


class NaverOAuthClient(OAuthClient):
    provider = OAuthProvider.NAVER

    authorize_path = "/oauth2.0/authorize"
    token_path = "/oauth2.0/token"
    user_info_path = "/v1/nid/me"

    def _parse_user_info(self, payload: dict[str, Any]) -> dict[str, Any]:
        # {"resultcode": "00", "message": "success", "response": {...}}
        if payload.get("resultcode") not in (None, "00"):
            raise KeyError("resultcode")
        profile = payload["response"]
        return {
            "external_id": str(profile["id"]),
            "email": profile["email"],
            "name": profile.get("name") or profile.get("nickname") or profile["email"],
        }
