"""Доступ к таблице пользователей."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .db.models import User
from .errors import LoginAlreadyTaken


class UserRepository:
    """Поиск и сохранение пользователей в рамках одной сессии."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self._session.get(User, user_id)

    async def find_by_login(self, login: str) -> Optional[User]:
        stmt = select(User).where(User.login == login)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        """
        Вставляет нового пользователя или сохраняет изменения существующего.

        Возвращает 409 (LoginAlreadyTaken) если login занят.
        """
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            raise LoginAlreadyTaken() from None
        await self._session.refresh(user)
        return user
