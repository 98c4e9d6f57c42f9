"""
Middleware авторизации по Bearer токену.

Запрос без заголовка Authorization проходит анонимно.
Недействительный токен отклоняется сразу с 401, даже на публичных маршрутах.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request

from .error_responses import error_response
from .errors import InvalidToken

logger = logging.getLogger(__name__)


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    """Возвращает токен из 'Bearer <token>' или None для других схем."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip()


def register_authentication_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def authenticate_request(request: Request, call_next):
        request.state.user = None
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return await call_next(request)

        container = request.app.state.container
        async with container.session_factory() as session:
            try:
                user = await container.authentication(session).resolve_token(token)
            except InvalidToken as exc:
                logger.warning(
                    "Отклонен недействительный токен: %s %s",
                    request.method,
                    request.url.path,
                )
                return error_response(exc)

        request.state.user = user
        return await call_next(request)
