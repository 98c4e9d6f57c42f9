"""Схемы запросов/ответов API."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Поля запросов необязательны на уровне схемы: пустые значения
# проверяет стратегия валидации операции, а не pydantic.


class UserCreateRequest(BaseModel):
    """Тело запроса создания пользователя."""

    login: Optional[str] = None
    senha: Optional[str] = None


class UserUpdateRequest(BaseModel):
    """Тело запроса обновления пользователя."""

    id: Optional[int] = None
    login: Optional[str] = None
    senha: Optional[str] = None


class LoginRequest(BaseModel):
    login: Optional[str] = None
    senha: Optional[str] = None


class UserResponse(BaseModel):
    """Публичное представление пользователя, без хеша пароля."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str


class TokenResponse(BaseModel):
    """Ответ с JWT токеном."""

    token: str
    tipo: str = "Bearer"
    expires_in: int = Field(..., description="Время жизни токена в секундах")
