# campus_connect/repositories/user_repository.py

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.base_model import utcnow
from campus_connect.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_by_ids(self, user_ids: list[int]) -> list[UserModel]:
        if not user_ids:
            return []
        stmt = select(UserModel).where(UserModel.id.in_(user_ids)).order_by(UserModel.name.asc())
        return list(self._session.execute(stmt).scalars().all())

    def search(self, query: str, *, limit: int = 10) -> list[UserModel]:
        term = query.strip().lower()
        stmt = (
            select(UserModel)
            .where(
                or_(
                    func.lower(UserModel.name).contains(term, autoescape=True),
                    func.lower(UserModel.email).contains(term, autoescape=True),
                )
            )
            .order_by(UserModel.name.asc())
            .limit(limit)
        )
        return list(self._session.execute(stmt).scalars().all())

    def exists(self, user_id: int) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id)
        return self._session.execute(stmt).first() is not None

    # -------------------------
    # Refresh token (escrita atômica de um campo por PK)
    # -------------------------

    def set_refresh_token_hash(self, *, user_id: int, token_hash: str) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(refresh_token_hash=token_hash)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def clear_refresh_token_hash(self, *, user_id: int) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(refresh_token_hash=None)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def get_by_id_and_refresh_hash(self, *, user_id: int, token_hash: str) -> UserModel | None:
        stmt = select(UserModel).where(
            UserModel.id == user_id,
            UserModel.refresh_token_hash == token_hash,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def update_fields(self, *, user_id: int, values: dict) -> bool:
        if not values:
            return True

        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(**values, updated_at=utcnow())
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def delete(self, user_id: int) -> bool:
        stmt = delete(UserModel).where(UserModel.id == user_id)
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0
