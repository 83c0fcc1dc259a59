# campus_connect/client/api_client.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from campus_connect.client.errors import ApiError, SessionExpiredError
from campus_connect.client.refresh_coordinator import RefreshCoordinator
from campus_connect.client.session_context import SessionContext

logger = logging.getLogger(__name__)

REFRESH_PATH = "/api/auth/refresh"

# 403 com estes códigos também vale um refresh (token inválido/expirado)
REFRESHABLE_403_CODES = frozenset({"InvalidToken", "TokenExpired"})


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def needs_refresh(response: httpx.Response) -> bool:
    if response.status_code == 401:
        return True
    if response.status_code == 403:
        return _json_body(response).get("code") in REFRESHABLE_403_CODES
    return False


def raise_for_api_error(response: httpx.Response) -> httpx.Response:
    if response.is_success:
        return response
    body = _json_body(response)
    raise ApiError(
        response.status_code,
        str(body.get("error") or response.reason_phrase or "Request failed"),
        body.get("code"),
    )


class CampusConnectClient:
    """Cliente HTTP da API com access token em memória e refresh single-flight.

    O refresh token viaja só no cookie HTTP-only, guardado no cookie jar do
    ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: SessionContext | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session or SessionContext()
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport, timeout=timeout)
        self.coordinator = RefreshCoordinator(self._refresh_access_token, self.session)

    async def __aenter__(self) -> "CampusConnectClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------
    # Núcleo
    # -------------------------

    def _headers(self, extra: Any = None) -> httpx.Headers:
        # headers do chamador primeiro; o bearer da sessão sempre vence
        headers = httpx.Headers(extra)
        token = self.session.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _dispatch(self, method: str, path: str, *, headers: Any = None, **kwargs: Any) -> httpx.Response:
        return await self._http.request(method, path, headers=self._headers(headers), **kwargs)

    async def request(self, method: str, path: str, *, refreshable: bool = True, **kwargs: Any) -> httpx.Response:
        response = await self._dispatch(method, path, **kwargs)

        if not refreshable or not needs_refresh(response):
            return raise_for_api_error(response)

        # uma única repetição: se falhar de novo, o erro sobe como está
        await self.coordinator.obtain_token()
        response = await self._dispatch(method, path, **kwargs)
        return raise_for_api_error(response)

    async def _refresh_access_token(self) -> str:
        response = await self._http.post(REFRESH_PATH)
        try:
            raise_for_api_error(response)
        except ApiError as e:
            raise SessionExpiredError(cause=e) from e

        token = _json_body(response).get("accessToken")
        if not token:
            raise SessionExpiredError("Refresh response without access token")
        return str(token)

    # -------------------------
    # Atalhos
    # -------------------------

    async def get(self, path: str, **kwargs: Any) -> Any:
        return (await self.request("GET", path, **kwargs)).json()

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return (await self.request("POST", path, json=json, **kwargs)).json()

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return (await self.request("PUT", path, json=json, **kwargs)).json()

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return (await self.request("DELETE", path, **kwargs)).json()

    # -------------------------
    # Sessão
    # -------------------------

    async def signup(self, *, name: str, email: str, password: str) -> dict:
        body = {"name": name, "email": email, "password": password}
        return await self.post("/api/auth/signup", json=body, refreshable=False)

    async def login(self, *, email: str, password: str) -> dict:
        data = await self.post("/api/auth/login", json={"email": email, "password": password}, refreshable=False)
        self.session.set_access_token(data["accessToken"])
        return data

    async def refresh(self) -> str:
        return await self.coordinator.obtain_token()

    async def logout(self) -> dict:
        try:
            return await self.post("/api/auth/logout", refreshable=False)
        finally:
            self.session.clear()
            self._http.cookies.clear()

    async def me(self) -> dict:
        return await self.get("/api/auth/me")
