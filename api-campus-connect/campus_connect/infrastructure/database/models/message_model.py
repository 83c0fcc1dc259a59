# campus_connect/infrastructure/database/models/message_model.py

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class MessageModel(BaseModel):
    __tablename__ = "tbMessages"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    conversation_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tbConversations.id"), nullable=False, index=True
    )

    sender_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tbUsers.id"), nullable=False
    )

    # pode ser vazio quando a mensagem só compartilha um post
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    post_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tbPosts.id"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
