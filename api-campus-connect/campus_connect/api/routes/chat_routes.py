# campus_connect/api/routes/chat_routes.py

from flask import Blueprint, jsonify, request

from campus_connect.api.middlewares.auth_middleware import current_identity, require_auth
from campus_connect.api.schemas.chat_schema import (
    CreateConversationRequest,
    CreateMessageRequest,
    pack_conversation,
    pack_message,
)
from campus_connect.core.exceptions import BadRequestError
from campus_connect.infrastructure.database.session import db_session
from campus_connect.infrastructure.realtime.socketio_conversation_notifier import SocketIOConversationNotifier
from campus_connect.infrastructure.realtime.socketio_message_notifier import SocketIOMessageNotifier
from campus_connect.repositories.conversation_participant_repository import ConversationParticipantRepository
from campus_connect.repositories.conversation_repository import ConversationRepository
from campus_connect.repositories.message_repository import MessageRepository
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.user_repository import UserRepository
from campus_connect.services.chat_service import ChatService

bp_chat = Blueprint("chat", __name__)

DEFAULT_MESSAGES_LIMIT = 50
MAX_MESSAGES_LIMIT = 200


def _build_service(session) -> ChatService:
    """Centraliza a criação do service pra evitar repetição em todas as rotas."""
    return ChatService(
        conv_repo=ConversationRepository(session),
        part_repo=ConversationParticipantRepository(session),
        msg_repo=MessageRepository(session),
        post_repo=PostRepository(session),
        user_repo=UserRepository(session),
        message_notifier=SocketIOMessageNotifier(),
        conversation_notifier=SocketIOConversationNotifier(),
    )


def _parse_limit() -> int:
    raw = request.args.get("limit")
    try:
        limit = int(raw) if raw else DEFAULT_MESSAGES_LIMIT
    except ValueError as e:
        raise BadRequestError("Invalid limit") from e
    return max(1, min(limit, MAX_MESSAGES_LIMIT))


@bp_chat.get("/conversations")
@require_auth
def list_conversations():
    identity = current_identity()
    with db_session() as session:
        views = _build_service(session).list_conversations(user_id=identity.id)
        conversations = [pack_conversation(v, viewer_id=identity.id) for v in views]
    return jsonify({"conversations": conversations}), 200


@bp_chat.post("/conversations")
@require_auth
def create_conversation():
    identity = current_identity()
    payload = CreateConversationRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        view = _build_service(session).create_conversation(
            user_id=identity.id,
            participant_ids=payload.participant_ids,
            name=payload.name,
        )
        body = {"conversation": pack_conversation(view, viewer_id=identity.id)}

    return jsonify(body), 201


@bp_chat.get("/conversations/<int:conversation_id>/messages")
@require_auth
def list_messages(conversation_id: int):
    identity = current_identity()
    limit = _parse_limit()

    with db_session() as session:
        views = _build_service(session).list_messages(
            user_id=identity.id,
            conversation_id=conversation_id,
            limit=limit,
        )
        messages = [pack_message(v) for v in views]

    return jsonify({"messages": messages}), 200


@bp_chat.post("/conversations/<int:conversation_id>/messages")
@require_auth
def create_message(conversation_id: int):
    identity = current_identity()
    payload = CreateMessageRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        svc = _build_service(session)
        sent = svc.send_message(
            user_id=identity.id,
            conversation_id=conversation_id,
            text=payload.text,
            post_id=payload.post_id,
        )
        message = pack_message(sent.message)
        views = {u.id: pack_conversation(sent.conversation, viewer_id=u.id) for u in sent.conversation.participants}

    # emite só depois do commit
    svc.announce(sent, message=message, views=views)

    return jsonify({"message": message, "conversation": views.get(identity.id)}), 201
