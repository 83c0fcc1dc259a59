# campus_connect/repositories/conversation_participant_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.models.conversation_participant_model import ConversationParticipantModel
from campus_connect.infrastructure.database.models.user_model import UserModel


class ConversationParticipantRepository(BaseRepository[ConversationParticipantModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def is_participant(self, *, conversation_id: int, user_id: int) -> bool:
        stmt = select(ConversationParticipantModel.id).where(
            ConversationParticipantModel.conversation_id == conversation_id,
            ConversationParticipantModel.user_id == user_id,
        )
        return self._session.execute(stmt).first() is not None

    def add_many(self, *, conversation_id: int, user_ids: list[int]) -> None:
        for user_id in user_ids:
            self._session.add(ConversationParticipantModel(conversation_id=conversation_id, user_id=user_id))
        self._session.flush()

    def users_by_conversation(self, conversation_ids: list[int]) -> dict[int, list[UserModel]]:
        if not conversation_ids:
            return {}
        stmt = (
            select(ConversationParticipantModel.conversation_id, UserModel)
            .join(UserModel, UserModel.id == ConversationParticipantModel.user_id)
            .where(ConversationParticipantModel.conversation_id.in_(conversation_ids))
            .order_by(ConversationParticipantModel.id.asc())
        )
        out: dict[int, list[UserModel]] = {}
        for conversation_id, user in self._session.execute(stmt).all():
            out.setdefault(conversation_id, []).append(user)
        return out

    def delete_for_user(self, user_id: int) -> int:
        stmt = delete(ConversationParticipantModel).where(ConversationParticipantModel.user_id == user_id)
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)
