# campus_connect/entities/identity.py
from dataclasses import dataclass

from campus_connect.core.exceptions import InvalidTokenError


@dataclass(frozen=True)
class Identity:
    """Sujeito autenticado, extraído das claims do token."""

    id: int
    email: str

    def claims(self) -> dict:
        return {"email": self.email}

    @classmethod
    def from_claims(cls, claims: dict) -> "Identity":
        try:
            return cls(id=int(claims["sub"]), email=str(claims.get("email", "")))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError() from e
