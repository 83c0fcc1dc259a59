# campus_connect/infrastructure/database/models/user_model.py

from datetime import datetime

from sqlalchemy import CHAR, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK, utcnow


class UserModel(BaseModel):
    __tablename__ = "tbUsers"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)

    password_algo: Mapped[str] = mapped_column(String(50), nullable=False)
    password_iterations: Mapped[int] = mapped_column(nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    password_salt: Mapped[str] = mapped_column(Text, nullable=False)

    # sha256 do refresh token vigente (uma sessão ativa por conta)
    refresh_token_hash: Mapped[str] = mapped_column(CHAR(64), nullable=True)

    bio: Mapped[str] = mapped_column(Text, nullable=True)
    portfolio_link: Mapped[str] = mapped_column(String(300), nullable=True)
    linkedin_link: Mapped[str] = mapped_column(String(300), nullable=True)
    github_link: Mapped[str] = mapped_column(String(300), nullable=True)
    leetcode_link: Mapped[str] = mapped_column(String(300), nullable=True)
    profile_photo: Mapped[str] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
    last_login: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
