# campus_connect/infrastructure/database/models/conversation_participant_model.py

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class ConversationParticipantModel(BaseModel):
    __tablename__ = "tbConversationParticipants"
    __table_args__ = (UniqueConstraint("conversation_id", "user_id", name="uq_conversation_participant"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    conversation_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tbConversations.id"), nullable=False, index=True
    )

    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tbUsers.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
