# campus_connect/client/session_context.py
from __future__ import annotations


class SessionContext:
    """Access token em memória. Nunca persistido; o refresh fica no cookie HTTP-only."""

    def __init__(self, access_token: str | None = None) -> None:
        self._access_token = access_token

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def set_access_token(self, token: str) -> None:
        self._access_token = token

    def clear(self) -> None:
        self._access_token = None
