"""
Сборка зависимостей приложения.

Единственное место, где настройки превращаются в конкретные объекты:
движок БД, фабрика сессий, хешер паролей и сервис токенов.
"""
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .authentication import AuthenticationService
from .config import Settings
from .db.session import create_engine, create_session_factory
from .repository import UserRepository
from .security import PasswordHasher, TokenService


@dataclass
class Container:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    hasher: PasswordHasher
    tokens: TokenService

    def users(self, session: AsyncSession) -> UserRepository:
        return UserRepository(session)

    def authentication(self, session: AsyncSession) -> AuthenticationService:
        return AuthenticationService(self.users(session), self.hasher, self.tokens)


def build_container(settings: Settings) -> Container:
    engine = create_engine(settings.database_url)
    return Container(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        hasher=PasswordHasher(settings.password_schemes, settings.bcrypt_rounds),
        tokens=TokenService(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            ttl_seconds=settings.jwt_ttl_seconds,
        ),
    )
