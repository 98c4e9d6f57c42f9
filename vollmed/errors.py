"""Доменные ошибки API и их HTTP-статусы."""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    """Ошибка валидации одного поля запроса."""

    field: str
    message: str


class ApiError(Exception):
    """Базовая ошибка, которую обработчик превращает в HTTP-ответ."""

    status_code: int = 500
    code: str = "erro_interno"
    message: str = "Erro interno"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Одно или несколько полей не прошли проверку."""

    status_code = 400
    code = "validacao"
    message = "Dados inválidos"

    def __init__(self, errors: List[FieldError]) -> None:
        super().__init__()
        self.errors = list(errors)


class NotFound(ApiError):
    status_code = 404
    code = "nao_encontrado"
    message = "Recurso não encontrado"


class AuthenticationFailed(ApiError):
    """Неверный логин или пароль. Сообщение не уточняет, что именно."""

    status_code = 401
    code = "credenciais_invalidas"
    message = "Login ou senha inválidos"


class InvalidToken(ApiError):
    status_code = 401
    code = "token_invalido"
    message = "Token JWT inválido ou expirado"


class AuthenticationRequired(ApiError):
    status_code = 401
    code = "autenticacao_necessaria"
    message = "Autenticação necessária"


class LoginAlreadyTaken(ApiError):
    status_code = 409
    code = "login_em_uso"
    message = "Login já está em uso"
