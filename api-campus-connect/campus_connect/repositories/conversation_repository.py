# campus_connect/repositories/conversation_repository.py
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.base_model import utcnow
from campus_connect.infrastructure.database.models.conversation_model import ConversationModel
from campus_connect.infrastructure.database.models.conversation_participant_model import (
    ConversationParticipantModel,
)


class ConversationRepository(BaseRepository[ConversationModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _order_by_last_activity(self):
        return (ConversationModel.last_message_at.desc(), ConversationModel.id.desc())

    def get_by_id(self, conversation_id: int) -> ConversationModel | None:
        stmt = select(ConversationModel).where(ConversationModel.id == conversation_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[ConversationModel]:
        stmt = (
            select(ConversationModel)
            .join(
                ConversationParticipantModel,
                ConversationParticipantModel.conversation_id == ConversationModel.id,
            )
            .where(ConversationParticipantModel.user_id == user_id)
            .order_by(*self._order_by_last_activity())
        )
        return list(self._session.execute(stmt).scalars().all())

    def find_direct(self, a: int, b: int) -> ConversationModel | None:
        # conversa 1:1 sem nome com exatamente esses dois participantes
        members = (
            select(ConversationParticipantModel.conversation_id)
            .group_by(ConversationParticipantModel.conversation_id)
            .having(func.count(ConversationParticipantModel.id) == 2)
        )
        stmt = (
            select(ConversationModel)
            .join(
                ConversationParticipantModel,
                ConversationParticipantModel.conversation_id == ConversationModel.id,
            )
            .where(
                ConversationModel.is_group.is_(False),
                ConversationModel.id.in_(members),
                ConversationParticipantModel.user_id.in_([a, b]),
            )
            .group_by(ConversationModel.id)
            .having(func.count(ConversationParticipantModel.id) == 2)
        )
        return self._session.execute(stmt).scalars().first()

    def set_last_message(self, *, conversation_id: int, message_id: int, at: datetime) -> None:
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(last_message_id=message_id, last_message_at=at, updated_at=utcnow())
        )
        self._session.execute(stmt)
