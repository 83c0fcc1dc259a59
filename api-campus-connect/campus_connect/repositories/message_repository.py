# campus_connect/repositories/message_repository.py

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, aliased

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.models.conversation_model import ConversationModel
from campus_connect.infrastructure.database.models.message_model import MessageModel
from campus_connect.infrastructure.database.models.user_model import UserModel


class MessageRepository(BaseRepository[MessageModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _rows_stmt(self):
        sender = aliased(UserModel)
        return select(MessageModel, sender).join(sender, sender.id == MessageModel.sender_id)

    def get_row(self, *, message_id: int):
        stmt = self._rows_stmt().where(MessageModel.id == message_id)
        return self._session.execute(stmt).first()  # (msg, sender) | None

    def rows_by_ids(self, message_ids: list[int]) -> dict[int, tuple]:
        if not message_ids:
            return {}
        stmt = self._rows_stmt().where(MessageModel.id.in_(message_ids))
        return {row[0].id: (row[0], row[1]) for row in self._session.execute(stmt).all()}

    def list_recent_rows(self, *, conversation_id: int, limit: int = 50):
        stmt = (
            self._rows_stmt()
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.id.desc())
            .limit(limit)
        )
        rows = list(self._session.execute(stmt).all())
        rows.reverse()  # ordem cronológica
        return rows

    def delete_for_user(self, user_id: int) -> None:
        own = select(MessageModel.id).where(MessageModel.sender_id == user_id)
        self._session.execute(
            update(ConversationModel)
            .where(ConversationModel.last_message_id.in_(own))
            .values(last_message_id=None)
        )
        self._session.execute(delete(MessageModel).where(MessageModel.sender_id == user_id))
