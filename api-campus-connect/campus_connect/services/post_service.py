# campus_connect/services/post_service.py

from dataclasses import dataclass, field

from campus_connect.config.settings import settings
from campus_connect.core.exceptions import BadRequestError, NotFoundError
from campus_connect.infrastructure.database.models.post_model import PostCommentModel, PostModel
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.user_repository import UserRepository

FEED_LIMIT = 50
MAX_CONTENT_CHARS = 2000
MAX_COMMENT_CHARS = 1000


@dataclass(frozen=True)
class PostView:
    post: PostModel
    author: UserModel
    likes_count: int = 0
    is_liked: bool = False
    comments: list[tuple[PostCommentModel, UserModel]] = field(default_factory=list)


class PostService:
    def __init__(self, *, post_repo: PostRepository, user_repo: UserRepository) -> None:
        self._post_repo = post_repo
        self._user_repo = user_repo

    def _views(self, rows, *, viewer_id: int) -> list[PostView]:
        post_ids = [post.id for post, _author in rows]
        like_counts = self._post_repo.like_counts(post_ids)
        liked = self._post_repo.liked_by(user_id=viewer_id, post_ids=post_ids)
        comments = self._post_repo.comment_rows(post_ids)

        return [
            PostView(
                post=post,
                author=author,
                likes_count=like_counts.get(post.id, 0),
                is_liked=post.id in liked,
                comments=comments.get(post.id, []),
            )
            for post, author in rows
        ]

    def _view(self, *, post_id: int, viewer_id: int) -> PostView:
        row = self._post_repo.get_row(post_id)
        if row is None:
            raise NotFoundError("Post not found")
        return self._views([row], viewer_id=viewer_id)[0]

    def feed(self, *, viewer_id: int) -> list[PostView]:
        return self._views(self._post_repo.list_feed_rows(limit=FEED_LIMIT), viewer_id=viewer_id)

    def create_post(self, *, author_id: int, content: str | None, image: str | None = None) -> PostView:
        content = (content or "").strip()
        if not content:
            raise BadRequestError("Post content is required")
        if len(content) > MAX_CONTENT_CHARS:
            raise BadRequestError(f"Post content cannot exceed {MAX_CONTENT_CHARS} characters")

        if image and len(image) > settings.max_post_image_chars:
            raise BadRequestError("Image payload too large. Please upload a smaller file.")

        post = self._post_repo.add(PostModel(author_id=author_id, content=content, image=image or None))
        return self._view(post_id=post.id, viewer_id=author_id)

    def toggle_like(self, *, post_id: int, user_id: int) -> PostView:
        if self._post_repo.get_row(post_id) is None:
            raise NotFoundError("Post not found")

        if self._post_repo.has_like(post_id=post_id, user_id=user_id):
            self._post_repo.remove_like(post_id=post_id, user_id=user_id)
        else:
            self._post_repo.add_like(post_id=post_id, user_id=user_id)

        return self._view(post_id=post_id, viewer_id=user_id)

    def add_comment(self, *, post_id: int, user_id: int, text: str | None) -> PostView:
        text = (text or "").strip()
        if not text:
            raise BadRequestError("Comment cannot be empty")
        if len(text) > MAX_COMMENT_CHARS:
            raise BadRequestError(f"Comment cannot exceed {MAX_COMMENT_CHARS} characters")

        if self._post_repo.get_row(post_id) is None:
            raise NotFoundError("Post not found")

        self._post_repo.add_comment(post_id=post_id, user_id=user_id, text=text)
        return self._view(post_id=post_id, viewer_id=user_id)

    def share(self, *, post_id: int, user_id: int, target_user_id: int | None = None) -> PostView:
        if self._post_repo.get_row(post_id) is None:
            raise NotFoundError("Post not found")

        if target_user_id is not None:
            if not self._user_repo.exists(target_user_id):
                raise BadRequestError("Invalid user to share with")
            self._post_repo.share_with(post_id=post_id, user_ids=[target_user_id])
        else:
            # sem destino: só recalcula o contador a partir do conjunto
            self._post_repo.share_with(post_id=post_id, user_ids=[])

        return self._view(post_id=post_id, viewer_id=user_id)
