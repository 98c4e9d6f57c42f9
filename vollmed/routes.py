"""
Маршруты пользователей и логина.

Префиксы: /usuarios, /login
"""
import logging

from fastapi import APIRouter, Depends, Path, Response, status

from .authentication import AuthenticatedUser, AuthenticationService
from .container import Container
from .db.models import User
from .dependencies import (
    get_authentication_service,
    get_container,
    get_current_user,
    get_password_hasher,
    get_user_repository,
)
from .errors import NotFound
from .repository import UserRepository
from .schemas import (
    LoginRequest,
    TokenResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from .security import PasswordHasher
from .validators import MAX_ID, MIN_ID, validate_or_raise

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/usuarios",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    tags=["usuarios"],
)
async def create_user(
    payload: UserCreateRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserResponse:
    """
    Создает пользователя.

    Возвращает 400 при пустых полях и 409 если login занят.
    """
    validate_or_raise("create", payload)

    user = await users.save(User(login=payload.login, password_hash=hasher.hash(payload.senha)))
    logger.info("Создан пользователь %s (id=%s)", user.login, user.id)

    response.headers["Location"] = f"/usuarios/{user.id}"
    return UserResponse.model_validate(user)


@router.put("/usuarios", response_model=UserResponse, tags=["usuarios"])
async def update_user(
    payload: UserUpdateRequest,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserResponse:
    """
    Обновляет login и пароль пользователя.

    Возвращает 404 если id не найден; в этом случае ничего не пишется.
    """
    validate_or_raise("update", payload)

    user = await users.find_by_id(payload.id)
    if user is None:
        raise NotFound("Usuário não encontrado")

    user.update_info(payload.login, hasher.hash(payload.senha))
    user = await users.save(user)
    logger.info("Обновлен пользователь id=%s", user.id)
    return UserResponse.model_validate(user)


@router.get("/usuarios/me", response_model=UserResponse, tags=["usuarios"])
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)) -> UserResponse:
    """Возвращает пользователя, от имени которого выпущен токен."""
    return UserResponse(id=current_user.id, login=current_user.login)


@router.get("/usuarios/{user_id}", response_model=UserResponse, tags=["usuarios"])
async def get_user(
    user_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    current_user: AuthenticatedUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = await users.find_by_id(user_id)
    if user is None:
        raise NotFound("Usuário não encontrado")
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse, tags=["autenticacao"])
async def login(
    payload: LoginRequest,
    auth: AuthenticationService = Depends(get_authentication_service),
    container: Container = Depends(get_container),
) -> TokenResponse:
    """
    Авторизация по логину и паролю, возвращает JWT.

    При неверном пароле/пользователе возвращает 401 без уточнения причины.
    """
    token = await auth.authenticate_and_issue_token(payload.login, payload.senha)
    logger.info("Успешный вход: %s", payload.login)
    return TokenResponse(token=token, expires_in=container.tokens.ttl_seconds)
