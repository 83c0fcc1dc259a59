# campus_connect/infrastructure/realtime/socketio_conversation_notifier.py
from __future__ import annotations

from campus_connect.core.interfaces.conversation_notifier import (
    ConversationNotifier,
    ConversationUpdatedEvent,
)
from campus_connect.infrastructure.realtime.socketio_server import socketio, user_room


class SocketIOConversationNotifier(ConversationNotifier):
    def notify_conversation_updated(self, event: ConversationUpdatedEvent) -> None:
        for user_id, view in event.views.items():
            socketio.emit("conversation:update", {"conversation": view}, to=user_room(user_id))
