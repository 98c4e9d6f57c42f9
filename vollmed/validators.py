"""
Стратегии валидации запросов по типу операции.

Каждая стратегия возвращает список ошибок полей в порядке объявления полей.
Пустой список означает, что запрос корректен.
"""
from typing import Any, Dict, List, Optional, Protocol

from .errors import FieldError, ValidationError

BLANK = "não deve estar em branco"
NULL = "não deve ser nulo"
# bcrypt учитывает только первые 72 байта пароля
MAX_PASSWORD_BYTES = 72
MIN_UPDATE_PASSWORD_LENGTH = 6
# Совпадает с String(100) колонки usuarios.login
MAX_LOGIN_LENGTH = 100
# Диапазон BIGINT первичного ключа
MIN_ID = 1
MAX_ID = 2**63 - 1


class RequestValidator(Protocol):
    def validate(self, payload: Any) -> List[FieldError]:
        ...


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_login(value: Optional[str]) -> Optional[str]:
    if _is_blank(value):
        return BLANK
    if len(value) > MAX_LOGIN_LENGTH:
        return f"tamanho deve ser no máximo {MAX_LOGIN_LENGTH}"
    return None


def _check_id(value: Optional[int]) -> Optional[str]:
    if value is None:
        return NULL
    if not MIN_ID <= value <= MAX_ID:
        return f"deve estar entre {MIN_ID} e {MAX_ID}"
    return None


def _check_password(value: Optional[str], min_length: int = 1) -> Optional[str]:
    if _is_blank(value):
        return BLANK
    if len(value) < min_length:
        return f"tamanho deve ser no mínimo {min_length}"
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"tamanho deve ser no máximo {MAX_PASSWORD_BYTES} bytes"
    return None


class CreateUserValidator:
    def validate(self, payload: Any) -> List[FieldError]:
        errors = []
        login_error = _check_login(payload.login)
        if login_error:
            errors.append(FieldError("login", login_error))
        password_error = _check_password(payload.senha)
        if password_error:
            errors.append(FieldError("senha", password_error))
        return errors


class UpdateUserValidator:
    def validate(self, payload: Any) -> List[FieldError]:
        errors = []
        id_error = _check_id(payload.id)
        if id_error:
            errors.append(FieldError("id", id_error))
        login_error = _check_login(payload.login)
        if login_error:
            errors.append(FieldError("login", login_error))
        password_error = _check_password(payload.senha, MIN_UPDATE_PASSWORD_LENGTH)
        if password_error:
            errors.append(FieldError("senha", password_error))
        return errors


VALIDATORS: Dict[str, RequestValidator] = {
    "create": CreateUserValidator(),
    "update": UpdateUserValidator(),
}


def get_validator(operation: str) -> RequestValidator:
    try:
        return VALIDATORS[operation]
    except KeyError:
        raise ValueError(f"Нет стратегии валидации для операции {operation!r}") from None


def validate_or_raise(operation: str, payload: Any) -> None:
    """Запускает стратегию операции и выбрасывает ValidationError при ошибках."""
    errors = get_validator(operation).validate(payload)
    if errors:
        raise ValidationError(errors)
