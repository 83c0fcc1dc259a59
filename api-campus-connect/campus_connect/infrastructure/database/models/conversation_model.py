# campus_connect/infrastructure/database/models/conversation_model.py

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class ConversationModel(BaseModel):
    __tablename__ = "tbConversations"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    # só conversas em grupo têm nome
    name: Mapped[str] = mapped_column(String(200), nullable=True)
    is_group: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # sem FK para evitar ciclo tbConversations <-> tbMessages
    last_message_id: Mapped[int] = mapped_column(BigInteger, nullable=True)
    last_message_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
