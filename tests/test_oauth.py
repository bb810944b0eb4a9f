"""
Tests for the OAuth bridge: provider clients, registry and social login.

Provider servers are replaced with httpx.MockTransport handlers.
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from market_api.models import Member
from market_api.services.oauth import (
    KakaoOAuthClient,
    NaverOAuthClient,
    OAuthLoginService,
    OAuthProviderRegistry,
    SocialMemberService,
)
from shared.config.settings import Settings
from shared.security.auth import verify_access_token
from shared.utils.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    OAuthExchangeFailedError,
)
from shared.utils.schemas import OAuthUserInfo


NAVER_PROFILE = {
    "resultcode": "00",
    "message": "success",
    "response": {
        "id": "naver-123",
        "email": "social@naver.com",
        "name": "Park Social",
        "nickname": "parky",
    },
}

KAKAO_PROFILE = {
    "id": 987654,
    "kakao_account": {
        "email": "social@kakao.com",
        "profile": {"nickname": "Choi Kakao"},
    },
}


def oauth_settings() -> Settings:
    return Settings(
        naver_client_id="naver-client",
        naver_client_secret="naver-secret",
        naver_redirect_url="http://testserver/api/oauth2/callback/naver",
        kakao_client_id="kakao-client",
        kakao_client_secret="kakao-secret",
        kakao_redirect_url="http://testserver/api/oauth2/callback/kakao",
    )


def provider_server(
    *,
    token_status: int = 200,
    token_body: dict | None = None,
    profile_status: int = 200,
    naver_profile: dict | None = None,
    kakao_profile: dict | None = None,
    calls: list | None = None,
):
    """Build a MockTransport that answers like Naver and Kakao."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        path = request.url.path

        if path in ("/oauth2.0/token", "/oauth/token"):
            body = token_body if token_body is not None else {
                "access_token": "provider-token",
                "token_type": "bearer",
            }
            return httpx.Response(token_status, json=body)

        if path == "/v1/nid/me":
            assert request.headers["Authorization"] == "Bearer provider-token"
            return httpx.Response(profile_status, json=naver_profile or NAVER_PROFILE)

        if path == "/v2/user/me":
            assert request.headers["Authorization"] == "Bearer provider-token"
            return httpx.Response(profile_status, json=kakao_profile or KAKAO_PROFILE)

        return httpx.Response(404, json={"error": "not_found"})

    return httpx.MockTransport(handler)


def make_registry(**server_options) -> OAuthProviderRegistry:
    http_client = httpx.Client(transport=provider_server(**server_options))
    return OAuthProviderRegistry(settings=oauth_settings(), http_client=http_client)


# =============================================================================
# Provider clients
# =============================================================================


class TestProviderClients:
    """Request shapes and profile normalization."""

    def test_naver_login_page_url(self):
        client = make_registry().get("naver")
        url = urlparse(client.get_login_page_url("xyz"))

        assert url.netloc == "nid.naver.com"
        assert url.path == "/oauth2.0/authorize"
        query = parse_qs(url.query)
        assert query["client_id"] == ["naver-client"]
        assert query["response_type"] == ["code"]
        assert query["state"] == ["xyz"]
        assert query["redirect_uri"] == ["http://testserver/api/oauth2/callback/naver"]

    def test_kakao_login_page_url(self):
        url = urlparse(make_registry().get("KAKAO").get_login_page_url("abc"))
        assert url.netloc == "kauth.kakao.com"
        assert url.path == "/oauth/authorize"

    def test_naver_token_exchange_posts_form(self):
        calls = []
        client = make_registry(calls=calls).get("naver")

        assert client.exchange_code("the-code") == "provider-token"

        request = calls[0]
        assert request.method == "POST"
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == ["authorization_code"]
        assert form["code"] == ["the-code"]
        assert form["client_secret"] == ["naver-secret"]

    def test_naver_profile_is_normalized(self):
        info = make_registry().get("naver").fetch_user_info("provider-token")
        assert info == OAuthUserInfo(
            provider="NAVER",
            external_id="naver-123",
            email="social@naver.com",
            name="Park Social",
        )

    def test_kakao_profile_is_normalized(self):
        info = make_registry().get("kakao").fetch_user_info("provider-token")
        assert info.provider == "KAKAO"
        assert info.external_id == "987654"
        assert info.email == "social@kakao.com"
        assert info.name == "Choi Kakao"

    def test_registry_returns_concrete_clients(self):
        registry = make_registry()
        assert isinstance(registry.get("naver"), NaverOAuthClient)
        assert isinstance(registry.get("kakao"), KakaoOAuthClient)

    def test_unknown_provider_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            make_registry().get("github")


class TestProviderFailures:
    """Every failing step maps to OAuthExchangeFailedError."""

    def test_token_endpoint_error_status(self):
        with pytest.raises(OAuthExchangeFailedError) as exc_info:
            make_registry(token_status=401).get("naver").exchange_code("bad")
        assert exc_info.value.step == "token_exchange"
        assert exc_info.value.status_code == 502

    def test_token_response_without_access_token(self):
        registry = make_registry(token_body={"error": "invalid_grant"})
        with pytest.raises(OAuthExchangeFailedError):
            registry.get("kakao").exchange_code("bad")

    def test_profile_endpoint_error_status(self):
        with pytest.raises(OAuthExchangeFailedError) as exc_info:
            make_registry(profile_status=500).get("naver").fetch_user_info("provider-token")
        assert exc_info.value.step == "user_info"

    def test_profile_without_email(self):
        registry = make_registry(kakao_profile={"id": 1, "kakao_account": {}})
        with pytest.raises(OAuthExchangeFailedError):
            registry.get("kakao").fetch_user_info("provider-token")

    def test_naver_error_resultcode(self):
        registry = make_registry(naver_profile={"resultcode": "024", "message": "auth failed"})
        with pytest.raises(OAuthExchangeFailedError):
            registry.get("naver").fetch_user_info("provider-token")

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        registry = OAuthProviderRegistry(
            settings=oauth_settings(),
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        with pytest.raises(OAuthExchangeFailedError):
            registry.get("naver").exchange_code("code")

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        registry = OAuthProviderRegistry(
            settings=oauth_settings(),
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        with pytest.raises(OAuthExchangeFailedError) as exc_info:
            registry.get("kakao").exchange_code("code")
        assert exc_info.value.step == "token_exchange"


# =============================================================================
# Social member resolution
# =============================================================================


class TestSocialMemberService:
    """register_if_absent merge policy."""

    def _info(self, **overrides) -> OAuthUserInfo:
        data = {
            "provider": "NAVER",
            "external_id": "naver-123",
            "email": "social@naver.com",
            "name": "Park Social",
        }
        data.update(overrides)
        return OAuthUserInfo(**data)

    def test_first_login_creates_customer(self, db_session):
        member = SocialMemberService(db_session).register_if_absent(self._info())

        assert member.id is not None
        assert member.role == "CUSTOMER"
        assert member.provider == "NAVER"
        assert member.provider_id == "naver-123"
        assert member.phone_number is None
        assert member.password.startswith("$2")
        assert member.pw_history == [member.password]

    def test_second_login_returns_same_member(self, db_session):
        service = SocialMemberService(db_session)
        first = service.register_if_absent(self._info())
        second = service.register_if_absent(self._info(name="Renamed"))

        assert second.id == first.id
        assert second.name == "Renamed"
        assert db_session.query(Member).count() == 1

    def test_email_owned_by_local_member_is_conflict(self, db_session, seed_member):
        with pytest.raises(AlreadyExistsError):
            SocialMemberService(db_session).register_if_absent(
                self._info(email=seed_member.email)
            )
        assert db_session.query(Member).count() == 1


# =============================================================================
# Full login flow
# =============================================================================


class TestOAuthLoginService:
    def test_login_issues_token_for_new_member(self, db_session):
        service = OAuthLoginService(db_session, registry=make_registry())

        result = service.login("naver", "the-code")

        member = db_session.query(Member).one()
        assert verify_access_token(result.access_token) == member.id
        assert result.member.email == "social@naver.com"
        assert result.member.provider == "NAVER"

    def test_failed_exchange_leaves_no_member(self, db_session):
        service = OAuthLoginService(db_session, registry=make_registry(token_status=400))

        with pytest.raises(OAuthExchangeFailedError):
            service.login("kakao", "bad-code")
        assert db_session.query(Member).count() == 0

    def test_failed_profile_fetch_leaves_no_member(self, db_session):
        service = OAuthLoginService(db_session, registry=make_registry(profile_status=503))

        with pytest.raises(OAuthExchangeFailedError):
            service.login("naver", "the-code")
        assert db_session.query(Member).count() == 0


class TestOAuthRoutes:
    """Redirect and callback endpoints."""

    @pytest.fixture
    def mocked_registry(self, monkeypatch):
        registry = make_registry()
        monkeypatch.setattr(
            "market_api.services.oauth.login_service.OAuthProviderRegistry",
            lambda: registry,
        )
        return registry

    def test_login_redirects_and_sets_state_cookie(self, client, mocked_registry):
        response = client.get("/api/oauth2/login/naver", follow_redirects=False)

        assert response.status_code == 307
        location = urlparse(response.headers["location"])
        assert location.netloc == "nid.naver.com"
        state = parse_qs(location.query)["state"][0]
        assert response.cookies.get("oauth_state") == state

    def _callback(self, client, provider, code="the-code", state="expected", cookie="expected"):
        headers = {"Cookie": f"oauth_state={cookie}"} if cookie is not None else {}
        params = {"code": code}
        if state is not None:
            params["state"] = state
        return client.get(f"/api/oauth2/callback/{provider}", params=params, headers=headers)

    def test_callback_logs_member_in(self, client, mocked_registry):
        response = self._callback(client, "kakao")

        assert response.status_code == 200
        data = response.json()
        assert data["member"]["email"] == "social@kakao.com"
        assert verify_access_token(data["access_token"]) == data["member"]["id"]

    def test_login_then_callback_round_trip(self, client, mocked_registry):
        redirect = client.get("/api/oauth2/login/naver", follow_redirects=False)
        state = parse_qs(urlparse(redirect.headers["location"]).query)["state"][0]

        response = self._callback(client, "naver", state=state, cookie=state)
        assert response.status_code == 200
        assert response.json()["member"]["provider"] == "NAVER"

    def test_callback_rejects_mismatched_state(self, client, mocked_registry):
        response = self._callback(client, "naver", state="forged")
        assert response.status_code == 400
        assert client.get("/api/members/me").status_code == 401

    def test_callback_without_cookie_is_rejected(self, client, mocked_registry):
        response = self._callback(client, "naver", state="attacker", cookie=None)
        assert response.status_code == 400

    def test_callback_without_state_is_rejected(self, client, mocked_registry):
        response = self._callback(client, "naver", state=None)
        assert response.status_code == 400

    def test_rejected_callback_creates_no_member(self, client, db_session, mocked_registry):
        self._callback(client, "kakao", state="attacker", cookie=None)
        assert db_session.query(Member).count() == 0

    def test_callback_unknown_provider(self, client, mocked_registry):
        response = self._callback(client, "github")
        assert response.status_code == 400
        assert "provider" in response.json()["detail"]

    def test_callback_provider_failure_is_bad_gateway(self, client, monkeypatch):
        registry = make_registry(token_status=500)
        monkeypatch.setattr(
            "market_api.services.oauth.login_service.OAuthProviderRegistry",
            lambda: registry,
        )
        response = self._callback(client, "naver", code="x")
        assert response.status_code == 502
