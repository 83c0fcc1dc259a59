# campus_connect/api/middlewares/auth_middleware.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from campus_connect.core.exceptions import InvalidTokenError, NoTokenError
from campus_connect.entities.identity import Identity
from campus_connect.infrastructure.security.jwt_provider import JwtProvider
from campus_connect.services.token_service import TokenService

F = TypeVar("F", bound=Callable[..., Any])


def access_verifier() -> TokenService:
    """TokenService sem repositório: verificação de access token não consulta o banco."""
    return TokenService(jwt_provider=JwtProvider())


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization")
    if not auth:
        raise NoTokenError()

    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise InvalidTokenError()


def require_auth(fn: F) -> F:
    """Valida o access token e popula g.identity."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.identity = access_verifier().verify_access(_get_bearer_token())
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> Identity:
    identity = getattr(g, "identity", None)
    if identity is None:
        raise NoTokenError()
    return identity
