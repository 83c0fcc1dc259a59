# campus_connect/infrastructure/database/models/connection_model.py

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class ConnectionModel(BaseModel):
    # aresta não-direcionada, gravada uma vez com user_id < connected_user_id
    __tablename__ = "tbConnections"
    __table_args__ = (UniqueConstraint("user_id", "connected_user_id", name="uq_connection_pair"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)
    connected_user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
