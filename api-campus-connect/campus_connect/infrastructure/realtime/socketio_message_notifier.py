# campus_connect/infrastructure/realtime/socketio_message_notifier.py
from __future__ import annotations

from campus_connect.core.interfaces.message_notifier import MessageCreatedEvent, MessageNotifier
from campus_connect.infrastructure.realtime.socketio_server import conversation_room, socketio


class SocketIOMessageNotifier(MessageNotifier):
    def notify_message_created(self, event: MessageCreatedEvent) -> None:
        payload = {
            "conversationId": event.conversation_id,
            "message": event.message,
        }
        socketio.emit("message:new", payload, to=conversation_room(event.conversation_id))
