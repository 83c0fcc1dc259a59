# campus_connect/repositories/post_repository.py

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, aliased

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.models.message_model import MessageModel
from campus_connect.infrastructure.database.models.post_model import (
    PostCommentModel,
    PostLikeModel,
    PostModel,
    PostShareModel,
)
from campus_connect.infrastructure.database.models.user_model import UserModel


class PostRepository(BaseRepository[PostModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _rows_stmt(self):
        author = aliased(UserModel)
        return select(PostModel, author).join(author, author.id == PostModel.author_id)

    def list_feed_rows(self, *, limit: int = 50):
        stmt = self._rows_stmt().order_by(PostModel.created_at.desc(), PostModel.id.desc()).limit(limit)
        return list(self._session.execute(stmt).all())  # [(post, author)]

    def get_row(self, post_id: int):
        stmt = self._rows_stmt().where(PostModel.id == post_id)
        return self._session.execute(stmt).first()  # (post, author) | None

    def get_rows_by_ids(self, post_ids: list[int]) -> dict[int, tuple]:
        if not post_ids:
            return {}
        stmt = self._rows_stmt().where(PostModel.id.in_(post_ids))
        return {row[0].id: (row[0], row[1]) for row in self._session.execute(stmt).all()}

    def set_shares_count(self, *, post_id: int, shares_count: int) -> None:
        stmt = update(PostModel).where(PostModel.id == post_id).values(shares_count=shares_count)
        self._session.execute(stmt)

    # -------------------------
    # Curtidas
    # -------------------------

    def has_like(self, *, post_id: int, user_id: int) -> bool:
        stmt = select(PostLikeModel.id).where(PostLikeModel.post_id == post_id, PostLikeModel.user_id == user_id)
        return self._session.execute(stmt).first() is not None

    def add_like(self, *, post_id: int, user_id: int) -> None:
        self._session.add(PostLikeModel(post_id=post_id, user_id=user_id))
        self._session.flush()

    def remove_like(self, *, post_id: int, user_id: int) -> None:
        stmt = delete(PostLikeModel).where(PostLikeModel.post_id == post_id, PostLikeModel.user_id == user_id)
        self._session.execute(stmt)

    def like_counts(self, post_ids: list[int]) -> dict[int, int]:
        if not post_ids:
            return {}
        stmt = (
            select(PostLikeModel.post_id, func.count(PostLikeModel.id))
            .where(PostLikeModel.post_id.in_(post_ids))
            .group_by(PostLikeModel.post_id)
        )
        return {post_id: int(count) for post_id, count in self._session.execute(stmt).all()}

    def liked_by(self, *, user_id: int, post_ids: list[int]) -> set[int]:
        if not post_ids:
            return set()
        stmt = select(PostLikeModel.post_id).where(
            PostLikeModel.user_id == user_id,
            PostLikeModel.post_id.in_(post_ids),
        )
        return set(self._session.execute(stmt).scalars().all())

    # -------------------------
    # Comentários
    # -------------------------

    def add_comment(self, *, post_id: int, user_id: int, text: str) -> PostCommentModel:
        model = PostCommentModel(post_id=post_id, user_id=user_id, text=text)
        self._session.add(model)
        self._session.flush()
        return model

    def comment_rows(self, post_ids: list[int]) -> dict[int, list[tuple]]:
        if not post_ids:
            return {}
        author = aliased(UserModel)
        stmt = (
            select(PostCommentModel, author)
            .join(author, author.id == PostCommentModel.user_id)
            .where(PostCommentModel.post_id.in_(post_ids))
            .order_by(PostCommentModel.id.asc())
        )
        out: dict[int, list[tuple]] = {}
        for comment, user in self._session.execute(stmt).all():
            out.setdefault(comment.post_id, []).append((comment, user))
        return out

    # -------------------------
    # Compartilhamentos
    # -------------------------

    def share_with(self, *, post_id: int, user_ids: list[int]) -> int:
        """Adiciona usuários ao conjunto de compartilhamento e devolve o total."""
        existing = set(
            self._session.execute(
                select(PostShareModel.user_id).where(PostShareModel.post_id == post_id)
            ).scalars().all()
        )
        for user_id in user_ids:
            if user_id not in existing:
                self._session.add(PostShareModel(post_id=post_id, user_id=user_id))
                existing.add(user_id)
        self._session.flush()

        self.set_shares_count(post_id=post_id, shares_count=len(existing))
        return len(existing)

    # -------------------------
    # Exclusão de conta
    # -------------------------

    def delete_for_user(self, user_id: int) -> None:
        own_posts = select(PostModel.id).where(PostModel.author_id == user_id)

        self._session.execute(update(MessageModel).where(MessageModel.post_id.in_(own_posts)).values(post_id=None))

        for model in (PostLikeModel, PostCommentModel, PostShareModel):
            self._session.execute(delete(model).where(model.post_id.in_(own_posts)))
            self._session.execute(delete(model).where(model.user_id == user_id))

        self._session.execute(delete(PostModel).where(PostModel.author_id == user_id))
