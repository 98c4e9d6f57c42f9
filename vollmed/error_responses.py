"""
Единая точка формирования тел ошибок.

Валидационные ошибки отдаются списком {campo, mensagem},
остальные — объектом {erro, mensagem}.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import ApiError, FieldError, ValidationError

logger = logging.getLogger(__name__)


def validation_items(errors: List[FieldError]) -> List[Dict[str, str]]:
    """Преобразует ошибки полей в список для тела ответа."""
    return [{"campo": error.field, "mensagem": error.message} for error in errors]


def error_body(exc: ApiError) -> Any:
    """Возвращает тело ответа для доменной ошибки."""
    if isinstance(exc, ValidationError):
        return validation_items(exc.errors)
    return {"erro": exc.code, "mensagem": exc.message}


def error_response(exc: ApiError) -> JSONResponse:
    """Строит HTTP-ответ для доменной ошибки."""
    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc),
        headers=headers,
    )


# Сообщения для типов ошибок pydantic; остальные получают DEFAULT_MESSAGE
PYDANTIC_MESSAGES: Dict[str, str] = {
    "missing": "campo obrigatório",
    "int_type": "deve ser um número inteiro",
    "int_parsing": "deve ser um número inteiro",
    "int_from_float": "deve ser um número inteiro",
    "string_type": "deve ser um texto",
    "model_attributes_type": "corpo deve ser um objeto JSON",
    "dict_type": "corpo deve ser um objeto JSON",
    "json_invalid": "JSON inválido",
}
DEFAULT_MESSAGE = "valor inválido"


def _message_for(item: Dict[str, Any]) -> str:
    error_type = item.get("type", "")
    ctx = item.get("ctx") or {}
    if error_type == "greater_than_equal":
        return f"deve ser maior ou igual a {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"deve ser menor ou igual a {ctx.get('le')}"
    return PYDANTIC_MESSAGES.get(error_type, DEFAULT_MESSAGE)


def field_errors_from_request(exc: RequestValidationError) -> List[FieldError]:
    """
    Переводит ошибки разбора запроса FastAPI в ошибки полей.

    Имя поля — последний элемент loc, кроме служебных body/path/query.
    """
    errors = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ())]
        names = [part for part in loc if part not in ("body", "path", "query")]
        field = names[-1] if names else (loc[-1] if loc else "body")
        errors.append(FieldError(field=field, message=_message_for(item)))
    return errors


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Ошибки разбора тела и параметров отдаются как 400, а не 422."""
    logger.info("Некорректный запрос %s %s", request.method, request.url.path)
    return error_response(ValidationError(field_errors_from_request(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
