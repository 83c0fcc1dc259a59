# campus_connect/services/user_service.py

import logging
import re
from dataclasses import dataclass

from campus_connect.core.exceptions import BadRequestError, UserNotFoundError
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.repositories.connection_repository import ConnectionRepository
from campus_connect.repositories.conversation_participant_repository import ConversationParticipantRepository
from campus_connect.repositories.message_repository import MessageRepository
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.student_repository import StudentRepository
from campus_connect.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"

PROFILE_FIELDS = (
    "name",
    "portfolio_link",
    "linkedin_link",
    "github_link",
    "leetcode_link",
    "bio",
    "profile_photo",
)

_FOUR_DIGIT_YEAR = re.compile(r"(20\d{2})")
_TWO_DIGIT_YEAR = re.compile(r"(\d{2})(?!\d)")


def extract_year_from_email(email: str | None) -> str | None:
    """Ano de ingresso embutido no email: primeiro "20xx", senão os dois últimos dígitos."""
    if not email:
        return None

    match = _FOUR_DIGIT_YEAR.search(email)
    if match:
        return match.group(1)

    match = _TWO_DIGIT_YEAR.search(email)
    if match:
        return f"20{match.group(1)}"

    return None


@dataclass(frozen=True)
class ProfileView:
    user: UserModel
    department: str
    year: str
    connections_count: int
    is_connected: bool = False
    is_own_profile: bool = True


class UserService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        student_repo: StudentRepository,
        connection_repo: ConnectionRepository,
        post_repo: PostRepository | None = None,
        participant_repo: ConversationParticipantRepository | None = None,
        message_repo: MessageRepository | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._student_repo = student_repo
        self._connection_repo = connection_repo
        self._post_repo = post_repo
        self._participant_repo = participant_repo
        self._message_repo = message_repo

    def _get_user_or_404(self, user_id: int) -> UserModel:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def _student_meta(self, email: str) -> tuple[str, str]:
        student = self._student_repo.get_by_email(email)
        department = (student.department if student else None) or NOT_AVAILABLE
        year = (student.year if student else None) or NOT_AVAILABLE

        if year == NOT_AVAILABLE:
            year = extract_year_from_email(email) or NOT_AVAILABLE
        return department, year

    def me(self, *, user_id: int) -> ProfileView:
        user = self._get_user_or_404(user_id)
        department, year = self._student_meta(user.email)
        return ProfileView(
            user=user,
            department=department,
            year=year,
            connections_count=self._connection_repo.count_for_user(user.id),
        )

    def get_profile(self, *, viewer_id: int, user_id: int) -> ProfileView:
        user = self._get_user_or_404(user_id)
        department, year = self._student_meta(user.email)
        return ProfileView(
            user=user,
            department=department,
            year=year,
            connections_count=self._connection_repo.count_for_user(user.id),
            is_connected=self._connection_repo.get_pair(viewer_id, user.id) is not None,
            is_own_profile=viewer_id == user.id,
        )

    def update_profile(self, *, user_id: int, values: dict) -> None:
        payload = {k: v for k, v in values.items() if k in PROFILE_FIELDS}
        if not payload:
            raise BadRequestError("No fields to update")

        if "name" in payload:
            name = (payload["name"] or "").strip()
            if not name:
                raise BadRequestError("Name cannot be empty")
            payload["name"] = name

        if not self._user_repo.update_fields(user_id=user_id, values=payload):
            raise UserNotFoundError()

    def search(self, *, query: str | None) -> list[UserModel]:
        if not query or not query.strip():
            return []
        return self._user_repo.search(query, limit=10)

    def delete_account(self, *, user_id: int) -> bool:
        """Remove o usuário e tudo que aponta para ele. Idempotente."""
        if not self._user_repo.exists(user_id):
            logger.info("delete account: user already gone", extra={"user_id": user_id})
            return False

        self._connection_repo.delete_for_user(user_id)
        if self._post_repo is not None:
            self._post_repo.delete_for_user(user_id)
        if self._message_repo is not None:
            self._message_repo.delete_for_user(user_id)
        if self._participant_repo is not None:
            self._participant_repo.delete_for_user(user_id)

        deleted = self._user_repo.delete(user_id)
        logger.info("account deleted", extra={"user_id": user_id})
        return deleted
