# campus_connect/core/interfaces/conversation_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ConversationUpdatedEvent:
    conversation_id: int
    last_message_id: int | None

    # uma visão por participante: o nome de uma conversa 1:1 depende de quem vê
    views: dict[int, dict[str, Any]]


class ConversationNotifier(Protocol):
    def notify_conversation_updated(self, event: ConversationUpdatedEvent) -> None:
        ...
