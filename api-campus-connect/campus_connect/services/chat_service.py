# campus_connect/services/chat_service.py

import logging
from dataclasses import dataclass, field
from datetime import timezone
from typing import Any

from campus_connect.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from campus_connect.core.interfaces.conversation_notifier import ConversationNotifier, ConversationUpdatedEvent
from campus_connect.core.interfaces.message_notifier import MessageCreatedEvent, MessageNotifier
from campus_connect.infrastructure.database.models.conversation_model import ConversationModel
from campus_connect.infrastructure.database.models.message_model import MessageModel
from campus_connect.infrastructure.database.models.post_model import PostModel
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.repositories.conversation_participant_repository import ConversationParticipantRepository
from campus_connect.repositories.conversation_repository import ConversationRepository
from campus_connect.repositories.message_repository import MessageRepository
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageView:
    message: MessageModel
    sender: UserModel
    post: PostModel | None = None
    post_author: UserModel | None = None


@dataclass(frozen=True)
class ConversationView:
    conversation: ConversationModel
    participants: list[UserModel] = field(default_factory=list)
    last_message: MessageView | None = None


@dataclass(frozen=True)
class SentMessage:
    message: MessageView
    conversation: ConversationView


class ChatService:
    def __init__(
        self,
        *,
        conv_repo: ConversationRepository,
        part_repo: ConversationParticipantRepository,
        msg_repo: MessageRepository,
        post_repo: PostRepository,
        user_repo: UserRepository,
        message_notifier: MessageNotifier,
        conversation_notifier: ConversationNotifier,
    ) -> None:
        self._conv_repo = conv_repo
        self._part_repo = part_repo
        self._msg_repo = msg_repo
        self._post_repo = post_repo
        self._user_repo = user_repo
        self._message_notifier = message_notifier
        self._conversation_notifier = conversation_notifier

    # -------------------------
    # Montagem das views
    # -------------------------

    def _message_views(self, rows) -> list[MessageView]:
        post_ids = list({msg.post_id for msg, _sender in rows if msg.post_id is not None})
        posts = self._post_repo.get_rows_by_ids(post_ids)

        out: list[MessageView] = []
        for msg, sender in rows:
            post, author = posts.get(msg.post_id, (None, None))
            out.append(MessageView(message=msg, sender=sender, post=post, post_author=author))
        return out

    def _conversation_views(self, conversations: list[ConversationModel]) -> list[ConversationView]:
        ids = [c.id for c in conversations]
        participants = self._part_repo.users_by_conversation(ids)

        last_ids = [c.last_message_id for c in conversations if c.last_message_id is not None]
        last_rows = self._msg_repo.rows_by_ids(last_ids)
        last_views = {view.message.id: view for view in self._message_views(list(last_rows.values()))}

        return [
            ConversationView(
                conversation=c,
                participants=participants.get(c.id, []),
                last_message=last_views.get(c.last_message_id),
            )
            for c in conversations
        ]

    def _get_conversation_or_404(self, conversation_id: int) -> ConversationModel:
        conv = self._conv_repo.get_by_id(conversation_id)
        if conv is None:
            raise NotFoundError("Conversation not found")
        return conv

    def _ensure_participant(self, *, conversation_id: int, user_id: int) -> None:
        if not self._part_repo.is_participant(conversation_id=conversation_id, user_id=user_id):
            raise ForbiddenError("Not a conversation participant")

    # -------------------------
    # Conversas
    # -------------------------

    def list_conversations(self, *, user_id: int) -> list[ConversationView]:
        return self._conversation_views(self._conv_repo.list_for_user(user_id))

    def create_conversation(
        self,
        *,
        user_id: int,
        participant_ids: list[int],
        name: str | None = None,
    ) -> ConversationView:
        name = (name or "").strip() or None

        # ids desconhecidos são descartados; o criador sempre participa
        others = [u.id for u in self._user_repo.list_by_ids(list(set(participant_ids) - {user_id}))]
        if not others:
            raise BadRequestError("Conversation must include at least one other participant")

        members = [user_id, *others]

        conv = None
        if len(members) == 2 and name is None:
            conv = self._conv_repo.find_direct(members[0], members[1])

        if conv is None:
            conv = self._conv_repo.add(
                ConversationModel(name=name, is_group=len(members) > 2 or name is not None)
            )
            self._part_repo.add_many(conversation_id=conv.id, user_ids=members)
            logger.info("conversation created", extra={"user_id": user_id})

        return self._conversation_views([conv])[0]

    # -------------------------
    # Mensagens
    # -------------------------

    def list_messages(self, *, user_id: int, conversation_id: int, limit: int = 50) -> list[MessageView]:
        self._get_conversation_or_404(conversation_id)
        self._ensure_participant(conversation_id=conversation_id, user_id=user_id)

        rows = self._msg_repo.list_recent_rows(conversation_id=conversation_id, limit=limit)
        return self._message_views(rows)

    def send_message(
        self,
        *,
        user_id: int,
        conversation_id: int,
        text: str | None = None,
        post_id: int | None = None,
    ) -> SentMessage:
        text = (text or "").strip()
        if not text and post_id is None:
            raise BadRequestError("Message text or post share is required")

        conv = self._get_conversation_or_404(conversation_id)
        self._ensure_participant(conversation_id=conversation_id, user_id=user_id)

        if post_id is not None and self._post_repo.get_row(post_id) is None:
            raise NotFoundError("Post not found")

        msg = self._msg_repo.add(
            MessageModel(conversation_id=conversation_id, sender_id=user_id, text=text, post_id=post_id)
        )
        self._conv_repo.set_last_message(conversation_id=conv.id, message_id=msg.id, at=msg.created_at)

        view = self._conversation_views([conv])[0]

        if post_id is not None:
            # compartilhar no chat = compartilhar com todos os participantes
            self._post_repo.share_with(post_id=post_id, user_ids=[u.id for u in view.participants])

        row = self._msg_repo.get_row(message_id=msg.id)
        return SentMessage(message=self._message_views([row])[0], conversation=view)

    def announce(
        self,
        sent: SentMessage,
        *,
        message: dict[str, Any],
        views: dict[int, dict[str, Any]],
    ) -> None:
        """Publica message:new e conversation:update. Chamar depois do commit."""
        msg = sent.message.message
        created_at = msg.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        self._message_notifier.notify_message_created(
            MessageCreatedEvent(
                conversation_id=msg.conversation_id,
                message_id=msg.id,
                sender_id=msg.sender_id,
                created_at_iso=created_at.astimezone(timezone.utc).isoformat(),
                message=message,
            )
        )
        self._conversation_notifier.notify_conversation_updated(
            ConversationUpdatedEvent(
                conversation_id=msg.conversation_id,
                last_message_id=msg.id,
                views=views,
            )
        )
