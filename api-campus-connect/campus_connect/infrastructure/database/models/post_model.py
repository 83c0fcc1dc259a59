# campus_connect/infrastructure/database/models/post_model.py

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class PostModel(BaseModel):
    __tablename__ = "tbPosts"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    author_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False, index=True)

    content: Mapped[str] = mapped_column(String(2000), nullable=False)
    # data URL (base64)
    image: Mapped[str] = mapped_column(Text, nullable=True)

    shares_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)


class PostLikeModel(BaseModel):
    __tablename__ = "tbPostLikes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_like"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    post_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbPosts.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class PostCommentModel(BaseModel):
    __tablename__ = "tbPostComments"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    post_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbPosts.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)
    text: Mapped[str] = mapped_column(String(1000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class PostShareModel(BaseModel):
    __tablename__ = "tbPostShares"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_share"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    post_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbPosts.id"), nullable=False)
    # usuário com quem o post foi compartilhado
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
