from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .authentication import AuthenticatedUser, AuthenticationService
from .container import Container
from .db.session import get_session
from .errors import AuthenticationRequired
from .repository import UserRepository
from .security import PasswordHasher


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_db_session(
    container: Container = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session(container.session_factory):
        yield session


def get_user_repository(
    container: Container = Depends(get_container),
    session: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    return container.users(session)


def get_password_hasher(container: Container = Depends(get_container)) -> PasswordHasher:
    return container.hasher


def get_authentication_service(
    container: Container = Depends(get_container),
    session: AsyncSession = Depends(get_db_session),
) -> AuthenticationService:
    return container.authentication(session)


def get_current_user(request: Request) -> AuthenticatedUser:
    """Возвращает пользователя, которого middleware привязал к запросу."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise AuthenticationRequired()
    return user
