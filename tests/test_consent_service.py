"""Tests for the consent manager httpx client."""

import json

import httpx
import pytest

from common.utils.exceptions import UpstreamServiceException
from connector.services.consent.consent_service import ConsentService
from connector.services.exchange.data_request_service import DataRequestService


BASE_URL = "https://consent.example.com/v1"


# ─────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────

class RecordingHandler:
    """MockTransport handler that logs in the participant and records requests."""

    def __init__(self, routes=None, login_token="participant-token"):
        self.routes = routes or {}
        self.login_token = login_token
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/v1/participants/login":
            return httpx.Response(200, json={"token": self.login_token})

        key = (request.method, request.url.path)
        if key in self.routes:
            return self.routes[key](request)
        return httpx.Response(404, json={"error": "not found"})

    def last(self):
        return self.requests[-1]


def make_service(handler, service_key="svc", secret_key="secret"):
    return ConsentService(
        base_url=BASE_URL,
        service_key=service_key,
        secret_key=secret_key,
        transport=httpx.MockTransport(handler),
    )


# ─────────────────────────────────────────────────────────────────
# Authentication
# ─────────────────────────────────────────────────────────────────

class TestParticipantLogin:
    @pytest.mark.asyncio
    async def test_first_call_logs_in_and_sends_bearer_token(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/me"): lambda r: httpx.Response(200, json=[{"_id": "c1"}]),
        })
        service = make_service(handler)

        result = await service.get_my_consents("user-jwt")

        assert result == [{"_id": "c1"}]
        login, call = handler.requests
        assert json.loads(login.content) == {"clientID": "svc", "clientSecret": "secret"}
        assert call.headers["Authorization"] == "Bearer participant-token"
        assert call.headers["x-user-key"] == "user-jwt"

    @pytest.mark.asyncio
    async def test_token_is_reused_between_calls(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/cm-user"): lambda r: httpx.Response(200, json=[]),
        })
        service = make_service(handler)

        await service.get_user_consents("cm-user")
        await service.get_user_consents("cm-user")

        paths = [r.url.path for r in handler.requests]
        assert paths.count("/v1/participants/login") == 1

    @pytest.mark.asyncio
    async def test_rejected_token_is_dropped_and_renewed(self):
        answers = iter([
            httpx.Response(401, json={"error": "token expired"}),
            httpx.Response(200, json=[]),
        ])
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/cm-user"): lambda r: next(answers),
        })
        service = make_service(handler)

        with pytest.raises(UpstreamServiceException) as exc_info:
            await service.get_user_consents("cm-user")

        assert exc_info.value.status_code == 401
        assert service.participant_token is None

        assert await service.get_user_consents("cm-user") == []
        paths = [r.url.path for r in handler.requests]
        assert paths.count("/v1/participants/login") == 2

    @pytest.mark.asyncio
    async def test_other_errors_keep_the_token(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/cm-user"): lambda r: httpx.Response(403, json={}),
        })
        service = make_service(handler)

        with pytest.raises(UpstreamServiceException):
            await service.get_user_consents("cm-user")

        assert service.participant_token == "participant-token"

    @pytest.mark.asyncio
    async def test_missing_credentials_raise(self):
        service = make_service(RecordingHandler(), service_key=None)

        with pytest.raises(UpstreamServiceException):
            await service.participant_login()

    @pytest.mark.asyncio
    async def test_user_login_does_not_need_participant_token(self):
        handler = RecordingHandler(routes={
            ("POST", "/v1/users/login"): lambda r: httpx.Response(200, json={"_id": "cm-1"}),
        })
        service = make_service(handler)

        result = await service.user_login("anna@example.com", "pw")

        assert result == {"_id": "cm-1"}
        assert [r.url.path for r in handler.requests] == ["/v1/users/login"]


# ─────────────────────────────────────────────────────────────────
# Consent calls
# ─────────────────────────────────────────────────────────────────

class TestConsentCalls:
    @pytest.mark.asyncio
    async def test_give_consent_posts_payload(self):
        handler = RecordingHandler(routes={
            ("POST", "/v1/consents/cm-user"): lambda r: httpx.Response(201, json={"_id": "c9"}),
        })
        service = make_service(handler)

        result = await service.give_consent("cm-user", {"privacyNotice": "pn-1"})

        assert result == {"_id": "c9"}
        assert json.loads(handler.last().content) == {"privacyNotice": "pn-1"}

    @pytest.mark.asyncio
    async def test_data_exchange_path_with_and_without_user(self):
        ok = lambda r: httpx.Response(200, json={"message": "started"})
        handler = RecordingHandler(routes={
            ("POST", "/v1/consents/cm-user/c1/data-exchange"): ok,
            ("POST", "/v1/consents/c1/data-exchange"): ok,
        })
        service = make_service(handler)

        await service.trigger_data_exchange("c1", "cm-user")
        assert handler.last().url.path == "/v1/consents/cm-user/c1/data-exchange"

        await service.trigger_data_exchange("c1")
        assert handler.last().url.path == "/v1/consents/c1/data-exchange"

    @pytest.mark.asyncio
    async def test_privacy_notice_paths(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/cm-user/prov/cons"): lambda r: httpx.Response(200, json=[]),
            ("GET", "/v1/consents/cm-user/privacy-notices/pn-1"): lambda r: httpx.Response(200, json={}),
        })
        service = make_service(handler)

        assert await service.get_privacy_notices("cm-user", "prov", "cons") == []
        assert await service.get_privacy_notice_by_id("cm-user", "pn-1") == {}

    @pytest.mark.asyncio
    async def test_post_access_token(self):
        handler = RecordingHandler(routes={
            ("POST", "/v1/consents/c1/token"): lambda r: httpx.Response(200, json={"ok": True}),
        })
        service = make_service(handler)

        await service.post_access_token("c1", "tok-123")

        assert json.loads(handler.last().content) == {"token": "tok-123"}


# ─────────────────────────────────────────────────────────────────
# Failures
# ─────────────────────────────────────────────────────────────────

class TestFailures:
    @pytest.mark.asyncio
    async def test_error_status_carries_upstream_body(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/me/missing"): lambda r: httpx.Response(
                404, json={"error": "consent not found"}
            ),
        })
        service = make_service(handler)

        with pytest.raises(UpstreamServiceException) as exc_info:
            await service.get_my_consent_by_id("user-jwt", "missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"error": "consent not found"}

    @pytest.mark.asyncio
    async def test_non_json_error_body_is_kept_as_text(self):
        handler = RecordingHandler(routes={
            ("GET", "/v1/consents/exchanges/provider"): lambda r: httpx.Response(
                502, text="Bad Gateway"
            ),
        })
        service = make_service(handler)

        with pytest.raises(UpstreamServiceException) as exc_info:
            await service.get_available_exchanges("provider")

        assert exc_info.value.body == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_transport_error_has_no_status(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(unreachable)

        with pytest.raises(UpstreamServiceException) as exc_info:
            await service.participant_login()

        assert exc_info.value.status_code is None


class TestDataRequestService:
    @pytest.mark.asyncio
    async def test_posts_to_provider_export_endpoint(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"message": "OK"})

        service = DataRequestService(transport=httpx.MockTransport(handler))

        result = await service.post_data_request(
            "https://provider.example.com/", {"data": "abc"}, "wrapped-key"
        )

        assert result == {"message": "OK"}
        assert str(seen[0].url) == "https://provider.example.com/consent/export"
        assert json.loads(seen[0].content) == {
            "signedConsent": {"data": "abc"},
            "encrypted": "wrapped-key",
        }

    @pytest.mark.asyncio
    async def test_provider_error_raises(self):
        service = DataRequestService(
            transport=httpx.MockTransport(lambda r: httpx.Response(400, json={"error": "bad"}))
        )

        with pytest.raises(UpstreamServiceException) as exc_info:
            await service.post_data_request("https://provider.example.com", {}, "k")

        assert exc_info.value.status_code == 400
