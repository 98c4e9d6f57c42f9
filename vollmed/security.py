"""Утилиты для хеширования паролей и выпуска JWT."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional

import jwt
from passlib.context import CryptContext

from .errors import InvalidToken

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    """Обертка над CryptContext (по умолчанию bcrypt)."""

    def __init__(self, schemes: Iterable[str] = ("bcrypt",), bcrypt_rounds: int = 12) -> None:
        schemes = list(schemes)
        options: Dict[str, Any] = {}
        if "bcrypt" in schemes:
            options["bcrypt__rounds"] = bcrypt_rounds
        self._context = CryptContext(schemes=schemes, deprecated="auto", **options)

    def hash(self, password: str) -> str:
        """Возвращает соленый хеш пароля."""
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Проверяет пароль против хеша. Нераспознанный хеш считается несовпадением."""
        try:
            return self._context.verify(password, hashed_password)
        except ValueError:
            logger.warning("Не удалось распознать формат хеша пароля")
            return False

    def dummy_verify(self) -> None:
        """Тратит столько же времени, сколько проверка настоящего хеша."""
        self._context.dummy_verify()


class TokenBuilder:
    """
    Пошаговая сборка JWT.

    Каждое поле задается отдельно, подпись выполняется только в build().
    """

    def __init__(self) -> None:
        self._claims: Dict[str, Any] = {}
        self._secret: Optional[str] = None
        self._algorithm = "HS256"

    def issuer(self, value: str) -> "TokenBuilder":
        self._claims["iss"] = value
        return self

    def subject(self, value: str) -> "TokenBuilder":
        self._claims["sub"] = value
        return self

    def expires_at(self, moment: datetime) -> "TokenBuilder":
        self._claims["exp"] = moment
        return self

    def secret(self, value: str) -> "TokenBuilder":
        self._secret = value
        return self

    def algorithm(self, value: str) -> "TokenBuilder":
        self._algorithm = value
        return self

    def build(self) -> str:
        """Подписывает накопленные claims и возвращает компактный JWT."""
        for claim in ("sub", "exp"):
            if claim not in self._claims:
                raise ValueError(f"Не задан claim {claim}")
        if not self._secret:
            raise ValueError("Не задан секрет подписи")
        return jwt.encode(dict(self._claims), self._secret, algorithm=self._algorithm)


class TokenService:
    """Выпускает и проверяет токены доступа с фиксированным issuer и TTL."""

    def __init__(
        self,
        secret: str,
        issuer: str,
        ttl_seconds: int = 7200,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None,
    ) -> None:
        if not secret:
            raise ValueError("Секрет подписи JWT не может быть пустым")
        self._secret = secret
        self._issuer = issuer
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock or utcnow

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, subject: str) -> str:
        """Создает JWT с полями iss, sub, exp."""
        return (
            TokenBuilder()
            .issuer(self._issuer)
            .subject(subject)
            .expires_at(self._clock() + self._ttl)
            .secret(self._secret)
            .algorithm(self._algorithm)
            .build()
        )

    def verify(self, token: str) -> str:
        """Декодирует и валидирует JWT, возвращает subject. Иначе InvalidToken."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iss", "sub"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidToken() from exc
        return payload["sub"]
