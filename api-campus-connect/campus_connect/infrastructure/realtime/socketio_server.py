# campus_connect/infrastructure/realtime/socketio_server.py
from __future__ import annotations

from flask_socketio import SocketIO

from campus_connect.config.settings import settings

# async_mode: "eventlet" em produção (ver wsgi.py), "threading" nos testes
socketio = SocketIO(
    cors_allowed_origins=settings.cors_origins,
    async_mode=settings.socketio_async_mode,
)


def user_room(user_id: int) -> str:
    return f"user:{user_id}"


def conversation_room(conversation_id: int) -> str:
    return f"conversation:{conversation_id}"
