# campus_connect/services/token_service.py
"""Issue and verify access/refresh tokens.

Access tokens are stateless: verification checks signature, expiry and type
only. Refresh tokens are stateful: besides verifying, the token's SHA-256
must equal the hash currently stored on the owner's user row, which is what
lets logout (or a new login) revoke a refresh token before it expires.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime

from campus_connect.core.exceptions import DatabaseError, RefreshNotRecognizedError
from campus_connect.entities.identity import Identity
from campus_connect.infrastructure.security.jwt_provider import ACCESS, REFRESH, JwtProvider
from campus_connect.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def _sha256(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    def __init__(self, *, jwt_provider: JwtProvider, user_repo: UserRepository | None = None) -> None:
        # sem user_repo só a verificação de access token (stateless) funciona
        self._jwt = jwt_provider
        self._user_repo = user_repo

    @property
    def _users(self) -> UserRepository:
        if self._user_repo is None:
            raise RuntimeError("TokenService needs a UserRepository for refresh tokens")
        return self._user_repo

    # -------------------------
    # Emissão
    # -------------------------

    def issue_access_token(self, identity: Identity, *, now: datetime | None = None) -> str:
        return self._jwt.issue_access_token(subject=str(identity.id), payload=identity.claims(), now=now)

    def issue_refresh_token(self, identity: Identity, *, now: datetime | None = None) -> str:
        # o chamador precisa persistir (ver persist_refresh_token / issue_session)
        return self._jwt.issue_refresh_token(subject=str(identity.id), payload=identity.claims(), now=now)

    def persist_refresh_token(self, identity: Identity, refresh_token: str) -> None:
        ok = self._users.set_refresh_token_hash(user_id=identity.id, token_hash=_sha256(refresh_token))
        if not ok:
            # token assinado mas não gravado = irrevogável; aborta a operação inteira
            raise DatabaseError("Failed to persist session")

    def issue_session(self, identity: Identity) -> TokenPair:
        access = self.issue_access_token(identity)
        refresh = self.issue_refresh_token(identity)
        self.persist_refresh_token(identity, refresh)
        return TokenPair(access_token=access, refresh_token=refresh)

    # -------------------------
    # Verificação
    # -------------------------

    def verify_access(self, token: str) -> Identity:
        return Identity.from_claims(self._jwt.decode(token, token_type=ACCESS))

    def verify_refresh(self, token: str) -> Identity:
        identity = Identity.from_claims(self._jwt.decode(token, token_type=REFRESH))

        user = self._users.get_by_id_and_refresh_hash(user_id=identity.id, token_hash=_sha256(token))
        if user is None:
            logger.info("refresh token not recognized", extra={"user_id": identity.id})
            raise RefreshNotRecognizedError()

        # email pode ter mudado desde a emissão
        return Identity(id=int(user.id), email=user.email)

    def rotate(self, identity: Identity) -> str:
        refresh = self.issue_refresh_token(identity)
        self.persist_refresh_token(identity, refresh)
        return refresh

    # -------------------------
    # Revogação
    # -------------------------

    def revoke(self, user_id: int) -> bool:
        return self._users.clear_refresh_token_hash(user_id=user_id)

    def identity_for_logout(self, token: str) -> Identity:
        """Somente assinatura/expiração; o logout não exige que o refresh ainda seja o vigente."""
        return Identity.from_claims(self._jwt.decode(token, token_type=REFRESH))
