# campus_connect/core/interfaces/message_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class MessageCreatedEvent:
    conversation_id: int
    message_id: int
    sender_id: int
    created_at_iso: str

    # mensagem completa já serializada (camelCase)
    message: dict[str, Any]


class MessageNotifier(Protocol):
    def notify_message_created(self, event: MessageCreatedEvent) -> None:
        ...
