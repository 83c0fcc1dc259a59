# campus_connect/api/realtime/socket_handlers.py
from __future__ import annotations

import logging

from flask import request
from flask_socketio import emit, join_room, leave_room

from campus_connect.api.middlewares.auth_middleware import access_verifier
from campus_connect.core.exceptions import AppError
from campus_connect.infrastructure.database.session import db_session
from campus_connect.infrastructure.realtime.socketio_server import conversation_room, socketio, user_room
from campus_connect.repositories.conversation_participant_repository import ConversationParticipantRepository

logger = logging.getLogger(__name__)

# sid -> user_id dos sockets autenticados
_connected: dict[str, int] = {}


def _get_bearer_token(auth: dict | None) -> str | None:
    # 1) Authorization: Bearer <token>
    header = request.headers.get("Authorization", "")
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]

    # 2) querystring ?token=...
    token = request.args.get("token")
    if token:
        return str(token).strip()

    # 3) payload de auth do handshake (socket.io-client: io(url, { auth: { token } }))
    if isinstance(auth, dict) and auth.get("token"):
        return str(auth["token"]).strip()

    return None


def _conversation_id(data) -> int | None:
    if not isinstance(data, dict):
        return None
    raw = data.get("conversationId", data.get("conversation_id"))
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def register_socket_handlers() -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        token = _get_bearer_token(auth)
        if not token:
            logger.info("socket rejected: no token")
            return False

        # mesma validação do require_auth
        try:
            identity = access_verifier().verify_access(token)
        except AppError as e:
            logger.info("socket rejected: %s", e.code)
            return False

        _connected[request.sid] = identity.id
        join_room(user_room(identity.id))
        return True

    @socketio.on("disconnect")
    def on_disconnect(*_args):
        _connected.pop(request.sid, None)

    @socketio.on("conversation:join")
    def on_join(data):
        user_id = _connected.get(request.sid)
        conversation_id = _conversation_id(data)
        if user_id is None or conversation_id is None:
            return {"ok": False, "error": "Invalid request"}

        with db_session() as session:
            allowed = ConversationParticipantRepository(session).is_participant(
                conversation_id=conversation_id, user_id=user_id
            )
        if not allowed:
            return {"ok": False, "error": "Not a conversation participant"}

        join_room(conversation_room(conversation_id))
        emit("conversation:joined", {"conversationId": conversation_id})
        return {"ok": True}

    @socketio.on("conversation:leave")
    def on_leave(data):
        conversation_id = _conversation_id(data)
        if conversation_id is None:
            return {"ok": False, "error": "Invalid request"}

        leave_room(conversation_room(conversation_id))
        emit("conversation:left", {"conversationId": conversation_id})
        return {"ok": True}
