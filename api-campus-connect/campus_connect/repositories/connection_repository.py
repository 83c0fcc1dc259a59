# campus_connect/repositories/connection_repository.py

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.models.connection_model import ConnectionModel


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


class ConnectionRepository(BaseRepository[ConnectionModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _involving(self, user_id: int):
        return or_(ConnectionModel.user_id == user_id, ConnectionModel.connected_user_id == user_id)

    def get_pair(self, a: int, b: int) -> ConnectionModel | None:
        first, second = _ordered(a, b)
        stmt = select(ConnectionModel).where(
            ConnectionModel.user_id == first,
            ConnectionModel.connected_user_id == second,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def create_pair(self, a: int, b: int) -> ConnectionModel:
        first, second = _ordered(a, b)
        return self.add(ConnectionModel(user_id=first, connected_user_id=second))

    def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count(ConnectionModel.id)).where(self._involving(user_id))
        return int(self._session.execute(stmt).scalar_one())

    def list_connected_ids(self, user_id: int) -> list[int]:
        stmt = select(ConnectionModel).where(self._involving(user_id))
        out: list[int] = []
        for conn in self._session.execute(stmt).scalars().all():
            other = conn.connected_user_id if conn.user_id == user_id else conn.user_id
            if other not in out:
                out.append(other)
        return out

    def delete_for_user(self, user_id: int) -> int:
        stmt = delete(ConnectionModel).where(self._involving(user_id))
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)
