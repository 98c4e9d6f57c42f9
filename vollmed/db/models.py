"""SQLAlchemy модели API Voll.med (async)."""
from datetime import datetime
from typing import Tuple

from sqlalchemy import BigInteger, DateTime, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

DEFAULT_ROLES: Tuple[str, ...] = ("ROLE_USER",)


class Base(DeclarativeBase):
    """Базовый класс для моделей с общей metadata."""


class User(Base):
    """Пользователь API. В password_hash хранится только хеш пароля."""

    __tablename__ = "usuarios"
    __table_args__ = (UniqueConstraint("login", name="usuarios_login_unique"),)

    # BIGSERIAL в PostgreSQL, INTEGER PRIMARY KEY в SQLite
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    login: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    @property
    def roles(self) -> Tuple[str, ...]:
        return DEFAULT_ROLES

    def update_info(self, login: str, password_hash: str) -> None:
        """Меняет логин и хеш пароля. Хешировать пароль должен вызывающий."""
        self.login = login
        self.password_hash = password_hash
