# campus_connect/client/errors.py
from __future__ import annotations


class ApiError(Exception):
    """Resposta não-2xx da API, com o corpo {"error", "code"} já extraído."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code!r}, code={self.code!r}, message={self.message!r})"


class SessionExpiredError(Exception):
    """O refresh falhou: o usuário precisa autenticar de novo."""

    def __init__(self, message: str = "Session expired", *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
