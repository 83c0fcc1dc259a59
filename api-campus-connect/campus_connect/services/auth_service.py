# campus_connect/services/auth_service.py

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from campus_connect.config.settings import settings
from campus_connect.core.exceptions import (
    AlreadyRegisteredError,
    ForbiddenDomainError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotAStudentError,
    UserNotFoundError,
)
from campus_connect.entities.identity import Identity
from campus_connect.infrastructure.database.base_model import utcnow
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.infrastructure.security.password_hasher import PasswordHasher, PasswordRecord
from campus_connect.repositories.student_repository import StudentRepository
from campus_connect.repositories.user_repository import UserRepository
from campus_connect.services.token_service import TokenPair, TokenService

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_institution_email(email: str, domain: str) -> bool:
    # sufixo exato: "x@rishihood.edu.in" e "x@nst.rishihood.edu.in" passam,
    # "x@nonrishihood.edu.in" não
    _, at, host = email.rpartition("@")
    if not at or not host:
        return False
    host = host.lower()
    return host == domain or host.endswith("." + domain)


@dataclass(frozen=True)
class RefreshResult:
    access_token: str
    refresh_token: str | None = None  # só quando há rotação


class AuthService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        student_repo: StudentRepository,
        token_service: TokenService,
    ) -> None:
        self._user_repo = user_repo
        self._student_repo = student_repo
        self._tokens = token_service

    def signup(self, *, name: str, email: str, password: str) -> UserModel:
        email = normalize_email(email)

        if not is_institution_email(email, settings.institution_domain):
            raise ForbiddenDomainError()

        if self._user_repo.get_by_email(email) is not None:
            raise AlreadyRegisteredError()

        if self._student_repo.get_by_email(email) is None:
            raise NotAStudentError()

        model = UserModel(name=name.strip(), email=email, refresh_token_hash=None)
        PasswordHasher.hash(password).apply_to(model)

        try:
            created = self._user_repo.add(model)
        except IntegrityError as e:
            # cadastro concorrente com o mesmo email
            raise AlreadyRegisteredError() from e

        logger.info("user signed up", extra={"user_id": created.id, "email": email})
        return created

    def login(self, *, email: str, password: str) -> tuple[UserModel, TokenPair]:
        email = normalize_email(email)

        user = self._user_repo.get_by_email(email)
        if user is None:
            logger.info("login failed: user not found", extra={"email": email})
            raise UserNotFoundError()

        record = PasswordRecord.of(user)
        if not PasswordHasher.verify(password, record):
            logger.info("login failed: invalid credentials", extra={"email": email})
            raise InvalidCredentialsError()

        if PasswordHasher.needs_rehash(record):
            # custo configurado subiu desde o cadastro
            PasswordHasher.hash(password).apply_to(user)
            logger.info("password rehashed", extra={"user_id": user.id})

        user.last_login = utcnow()
        tokens = self._tokens.issue_session(Identity(id=int(user.id), email=user.email))
        return user, tokens

    def refresh(self, *, refresh_token: str) -> RefreshResult:
        identity = self._tokens.verify_refresh(refresh_token)
        access = self._tokens.issue_access_token(identity)

        if settings.rotate_refresh_on_use:
            return RefreshResult(access_token=access, refresh_token=self._tokens.rotate(identity))
        return RefreshResult(access_token=access)

    def logout(self, *, refresh_token: str | None) -> bool:
        if not refresh_token:
            return False
        try:
            identity = self._tokens.identity_for_logout(refresh_token)
        except InvalidTokenError as e:
            logger.warning("logout token cleanup skipped: %s", e)
            return False
        return self._tokens.revoke(identity.id)
