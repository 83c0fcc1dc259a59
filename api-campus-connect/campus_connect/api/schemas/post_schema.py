# campus_connect/api/schemas/post_schema.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from campus_connect.api.schemas._datetime_serializer import serialize_dt
from campus_connect.api.schemas.user_schema import UserMiniResponse
from campus_connect.services.post_service import PostView


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePostRequest(_CamelModel):
    content: str | None = None
    image: str | None = None


class CommentRequest(_CamelModel):
    text: str | None = None


class SharePostRequest(_CamelModel):
    target_user_id: int | None = None


class CommentResponse(_CamelModel):
    id: int
    text: str
    created_at: datetime
    user: UserMiniResponse | None

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)


class PostResponse(_CamelModel):
    id: int
    content: str
    image: str | None = None
    created_at: datetime
    author: UserMiniResponse | None
    likes_count: int
    is_liked: bool
    comments: list[CommentResponse]
    comments_count: int
    shares_count: int

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        post = view.post
        return cls(
            id=post.id,
            content=post.content,
            image=post.image or None,
            created_at=post.created_at,
            author=UserMiniResponse.from_model(view.author),
            likes_count=view.likes_count,
            is_liked=view.is_liked,
            comments=[
                CommentResponse(
                    id=comment.id,
                    text=comment.text,
                    created_at=comment.created_at,
                    user=UserMiniResponse.from_model(user),
                )
                for comment, user in view.comments
            ],
            comments_count=len(view.comments),
            shares_count=post.shares_count or 0,
        )


def pack_post(view: PostView) -> dict:
    return PostResponse.from_view(view).model_dump(by_alias=True)
