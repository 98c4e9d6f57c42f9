"""Проверка учетных данных и выпуск токена в одном месте."""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .db.models import User
from .errors import AuthenticationFailed, InvalidToken
from .security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


class UserLookup(Protocol):
    async def find_by_login(self, login: str) -> Optional[User]:
        ...


@dataclass(frozen=True)
class AuthenticatedUser:
    """Личность, привязанная к текущему запросу."""

    id: int
    login: str
    roles: Tuple[str, ...]


class AuthenticationService:
    def __init__(self, users: UserLookup, hasher: PasswordHasher, tokens: TokenService) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def authenticate_and_issue_token(self, login: Optional[str], password: Optional[str]) -> str:
        """
        Авторизация по логину и паролю, возвращает JWT.

        Отсутствующий пользователь и неверный пароль дают одну и ту же ошибку.
        """
        if not login or not password:
            raise AuthenticationFailed()
        user = await self._users.find_by_login(login)
        if user is None:
            # время ответа не должно зависеть от того, существует ли логин
            self._hasher.dummy_verify()
            logger.info("Неудачная попытка входа для логина %s", login)
            raise AuthenticationFailed()
        if not self._hasher.verify(password, user.password_hash):
            logger.info("Неудачная попытка входа для логина %s", login)
            raise AuthenticationFailed()
        return self._tokens.issue(user.login)

    async def resolve_token(self, token: str) -> AuthenticatedUser:
        """Проверяет токен и находит пользователя по subject."""
        login = self._tokens.verify(token)
        user = await self._users.find_by_login(login)
        if user is None:
            raise InvalidToken()
        return AuthenticatedUser(id=user.id, login=user.login, roles=user.roles)
