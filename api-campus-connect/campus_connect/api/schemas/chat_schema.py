# campus_connect/api/schemas/chat_schema.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from campus_connect.api.schemas._datetime_serializer import serialize_dt
from campus_connect.api.schemas.user_schema import UserMiniResponse
from campus_connect.services.chat_service import ConversationView, MessageView

POST_PREVIEW_CHARS = 200


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateConversationRequest(_CamelModel):
    participant_ids: list[int] = Field(default_factory=list)
    name: str | None = Field(default=None, max_length=200)


class CreateMessageRequest(_CamelModel):
    text: str | None = None
    post_id: int | None = None


class PostSummaryResponse(_CamelModel):
    id: int
    content: str
    image: str | None = None
    author: UserMiniResponse | None = None


class MessageResponse(_CamelModel):
    id: int
    text: str
    created_at: datetime
    sender: UserMiniResponse | None
    post: PostSummaryResponse | None = None

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)

    @classmethod
    def from_view(cls, view: MessageView) -> "MessageResponse":
        post = None
        if view.post is not None:
            post = PostSummaryResponse(
                id=view.post.id,
                content=(view.post.content or "")[:POST_PREVIEW_CHARS],
                image=view.post.image or None,
                author=UserMiniResponse.from_model(view.post_author),
            )
        return cls(
            id=view.message.id,
            text=view.message.text or "",
            created_at=view.message.created_at,
            sender=UserMiniResponse.from_model(view.sender),
            post=post,
        )


class ConversationResponse(_CamelModel):
    id: int
    name: str
    is_group: bool
    participants: list[UserMiniResponse]
    last_message: MessageResponse | None = None
    last_message_at: datetime | None = None

    @field_serializer("last_message_at")
    def serialize_last_message_at(self, value: datetime | None):
        return serialize_dt(value)

    @classmethod
    def from_view(cls, view: ConversationView, *, viewer_id: int) -> "ConversationResponse":
        conv = view.conversation
        return cls(
            id=conv.id,
            name=_display_name(view, viewer_id),
            is_group=bool(conv.is_group),
            participants=[UserMiniResponse.from_model(u) for u in view.participants],
            last_message=MessageResponse.from_view(view.last_message) if view.last_message else None,
            last_message_at=conv.last_message_at,
        )


def _display_name(view: ConversationView, viewer_id: int) -> str:
    # grupo usa o próprio nome; 1:1 mostra o outro participante
    if view.conversation.is_group:
        return view.conversation.name or "Group chat"
    other = next((u for u in view.participants if u.id != viewer_id), None)
    return other.name if other else "Conversation"


def pack_message(view: MessageView) -> dict:
    return MessageResponse.from_view(view).model_dump(by_alias=True)


def pack_conversation(view: ConversationView, *, viewer_id: int) -> dict:
    return ConversationResponse.from_view(view, viewer_id=viewer_id).model_dump(by_alias=True)
