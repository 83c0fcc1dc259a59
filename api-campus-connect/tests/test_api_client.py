import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from campus_connect.client.api_client import REFRESH_PATH, CampusConnectClient, needs_refresh
from campus_connect.client.errors import ApiError, SessionExpiredError
from campus_connect.client.session_context import SessionContext
from campus_connect.infrastructure.security.jwt_provider import JwtProvider
from tests.factories import DEFAULT_PASSWORD
from tests.helpers import make_user

BASE_URL = "http://testserver"


class FakeApi:
    """Servidor falso: aceita apenas o token ``valid`` e conta os refreshes."""

    def __init__(self, *, refresh_status=200, token_after_refresh="fresh", expired_code=None):
        self.valid = "fresh"
        self.refresh_calls = 0
        self.refresh_status = refresh_status
        self.token_after_refresh = token_after_refresh
        self.expired_code = expired_code
        self.seen = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.seen.append((request.method, path, request.headers.get("Authorization")))

        if path == REFRESH_PATH:
            self.refresh_calls += 1
            await asyncio.sleep(0.01)
            if self.refresh_status != 200:
                return httpx.Response(self.refresh_status, json={"error": "Invalid refresh token", "code": "InvalidToken"})
            return httpx.Response(200, json={"accessToken": self.token_after_refresh})

        if path == "/api/auth/login":
            return httpx.Response(401, json={"error": "Invalid credentials", "code": "InvalidCredentials"})

        if request.headers.get("Authorization") != f"Bearer {self.valid}":
            if self.expired_code:
                return httpx.Response(403, json={"error": "Token expired", "code": self.expired_code})
            return httpx.Response(401, json={"error": "No token provided", "code": "NoToken"})
        return httpx.Response(200, json={"ok": True, "path": path})


def _client(api, token="stale"):
    return CampusConnectClient(BASE_URL, session=SessionContext(token), transport=httpx.MockTransport(api))


def test_needs_refresh_classification():
    def resp(status, body=None):
        return httpx.Response(status, json=body or {})

    assert needs_refresh(resp(401))
    assert needs_refresh(resp(403, {"code": "TokenExpired"}))
    assert needs_refresh(resp(403, {"code": "InvalidToken"}))
    assert not needs_refresh(resp(403, {"code": "Forbidden"}))
    assert not needs_refresh(resp(404))
    assert not needs_refresh(httpx.Response(403, content=b"not json"))


def test_unauthorized_request_refreshes_and_replays():
    api = FakeApi()

    async def scenario():
        async with _client(api) as client:
            data = await client.get("/api/posts/feed")
            assert data == {"ok": True, "path": "/api/posts/feed"}
            assert client.session.access_token == "fresh"

    asyncio.run(scenario())

    assert api.refresh_calls == 1
    assert api.seen[-1] == ("GET", "/api/posts/feed", "Bearer fresh")


@pytest.mark.parametrize("code", ["TokenExpired", "InvalidToken"])
def test_forbidden_with_token_code_refreshes(code):
    api = FakeApi(expired_code=code)

    async def scenario():
        async with _client(api) as client:
            assert (await client.get("/api/auth/me"))["ok"] is True

    asyncio.run(scenario())
    assert api.refresh_calls == 1


def test_replayed_request_is_not_retried_twice():
    # o refresh devolve um token que o servidor continua recusando
    api = FakeApi(token_after_refresh="still-bad")

    async def scenario():
        async with _client(api) as client:
            with pytest.raises(ApiError) as exc:
                await client.get("/api/auth/me")
            return exc.value

    err = asyncio.run(scenario())

    assert err.status_code == 401
    assert err.code == "NoToken"
    assert api.refresh_calls == 1
    assert [s for s in api.seen if s[1] == "/api/auth/me"] == [
        ("GET", "/api/auth/me", "Bearer stale"),
        ("GET", "/api/auth/me", "Bearer still-bad"),
    ]


def test_refresh_failure_expires_session():
    api = FakeApi(refresh_status=403)

    async def scenario():
        async with _client(api) as client:
            with pytest.raises(SessionExpiredError) as exc:
                await client.get("/api/auth/me")
            assert client.session.access_token is None
            return exc.value

    err = asyncio.run(scenario())

    assert isinstance(err.cause, ApiError)
    assert err.cause.status_code == 403


def test_concurrent_unauthorized_requests_share_one_refresh():
    api = FakeApi()

    async def scenario():
        async with _client(api) as client:
            results = await asyncio.gather(*(client.get(f"/api/chat/conversations?n={i}") for i in range(6)))
            assert all(r["ok"] for r in results)

    asyncio.run(scenario())
    assert api.refresh_calls == 1


def test_failed_login_never_triggers_refresh():
    api = FakeApi()

    async def scenario():
        async with _client(api, token=None) as client:
            with pytest.raises(ApiError) as exc:
                await client.login(email="x@rishihood.edu.in", password="wrong")
            return exc.value

    err = asyncio.run(scenario())

    assert err.status_code == 401
    assert err.code == "InvalidCredentials"
    assert api.refresh_calls == 0


def test_caller_headers_are_merged_with_bearer():
    api = FakeApi()
    request_ids = []

    async def handler(request: httpx.Request) -> httpx.Response:
        request_ids.append(request.headers.get("X-Request-ID"))
        return await api(request)

    async def scenario():
        client = CampusConnectClient(BASE_URL, session=SessionContext("stale"), transport=httpx.MockTransport(handler))
        async with client:
            data = await client.get("/api/auth/me", headers={"X-Request-ID": "abc-123"})
            assert data["ok"] is True

    asyncio.run(scenario())

    assert api.seen[-1] == ("GET", "/api/auth/me", "Bearer fresh")
    assert request_ids[0] == "abc-123"
    assert request_ids[-1] == "abc-123"


# -------------------------
# Contra a aplicação real
# -------------------------


def _flask_transport(app):
    flask_client = app.test_client(use_cookies=False)

    def handler(request: httpx.Request) -> httpx.Response:
        headers = [(k, v) for k, v in request.headers.items() if k.lower() not in ("host", "content-length")]
        res = flask_client.open(
            request.url.path,
            method=request.method,
            headers=headers,
            data=request.content,
            query_string=request.url.query.decode("ascii"),
        )
        return httpx.Response(res.status_code, headers=list(res.headers.items()), content=res.get_data())

    return httpx.MockTransport(handler)


def test_expired_access_token_is_renewed_through_refresh_cookie(app):
    user = make_user()
    issued = datetime.now(tz=timezone.utc) - timedelta(minutes=16)
    stale = JwtProvider().issue_access_token(subject=str(user.id), payload={"email": user.email}, now=issued)

    async def scenario():
        async with CampusConnectClient(BASE_URL, transport=_flask_transport(app)) as client:
            await client.login(email=user.email, password=DEFAULT_PASSWORD)
            assert client.session.is_authenticated

            client.session.set_access_token(stale)
            me = await client.me()

            assert me["id"] == user.id
            assert client.session.access_token not in (None, stale)

            await client.logout()
            assert not client.session.is_authenticated

    asyncio.run(scenario())


def test_refresh_after_logout_expires_session(app):
    user = make_user()

    async def scenario():
        async with CampusConnectClient(BASE_URL, transport=_flask_transport(app)) as client:
            await client.login(email=user.email, password=DEFAULT_PASSWORD)
            cookies = dict(client._http.cookies)
            await client.logout()

            # cookie antigo reaproveitado: o hash foi apagado no logout
            for name, value in cookies.items():
                client._http.cookies.set(name, value)
            with pytest.raises(SessionExpiredError):
                await client.refresh()

    asyncio.run(scenario())


def test_signup_error_is_reported_without_refresh(app):
    async def scenario():
        async with CampusConnectClient(BASE_URL, transport=_flask_transport(app)) as client:
            with pytest.raises(ApiError) as exc:
                await client.signup(name="Eve", email="eve@gmail.com", password="longenough1")
            return exc.value

    err = asyncio.run(scenario())
    assert err.status_code == 403
    assert err.code == "ForbiddenDomain"
