# campus_connect/infrastructure/security/jwt_provider.py

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from campus_connect.config.settings import settings
from campus_connect.core.exceptions import InvalidTokenError, TokenExpiredError

ACCESS = "access"
REFRESH = "refresh"


class JwtProvider:
    def __init__(
        self,
        *,
        access_secret: str | None = None,
        refresh_secret: str | None = None,
        access_minutes: int | None = None,
        refresh_minutes: int | None = None,
    ) -> None:
        # access e refresh assinados com segredos distintos
        self._secrets = {
            ACCESS: access_secret or settings.jwt_secret,
            REFRESH: refresh_secret or settings.jwt_refresh_secret,
        }
        self._ttl_minutes = {
            ACCESS: access_minutes or settings.jwt_access_minutes,
            REFRESH: refresh_minutes or settings.jwt_refresh_minutes,
        }
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._algorithm = "HS256"

    def issue_token(
        self,
        *,
        subject: str,
        payload: dict,
        token_type: str,
        minutes: int | None = None,
        now: datetime | None = None,
    ) -> str:
        now = now or datetime.now(tz=timezone.utc)
        ttl = minutes if minutes and minutes > 0 else self._ttl_minutes[token_type]
        exp = now + timedelta(minutes=ttl)

        claims = {
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
            "typ": token_type,
        }
        claims.update(payload)
        return jwt.encode(claims, self._secrets[token_type], algorithm=self._algorithm)

    def issue_access_token(self, *, subject: str, payload: dict, now: datetime | None = None) -> str:
        return self.issue_token(subject=subject, payload=payload, token_type=ACCESS, now=now)

    def issue_refresh_token(self, *, subject: str, payload: dict, now: datetime | None = None) -> str:
        return self.issue_token(subject=subject, payload=payload, token_type=REFRESH, now=now)

    def decode(self, token: str, *, token_type: str = ACCESS) -> dict:
        try:
            claims = jwt.decode(
                token,
                self._secrets[token_type],
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "jti", "typ"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

        if claims.get("typ") != token_type:
            raise InvalidTokenError()
        return claims
