"""Точка входа API Voll.med."""
import logging
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import make_url

from .config import Settings, get_settings
from .container import build_container
from .db.models import Base
from .error_responses import register_exception_handlers
from .logging_config import configure_logging
from .middleware import register_authentication_middleware
from .routes import router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Собирает приложение; настройки по умолчанию читаются из окружения."""
    settings = settings or get_settings()
    configure_logging(settings)
    logger = logging.getLogger(settings.app_name)

    container = build_container(settings)

    app = FastAPI(
        title="Voll.med API",
        version="0.1.0",
        description="Сервис пользователей и JWT-авторизации.",
    )
    app.state.container = container

    register_exception_handlers(app)
    register_authentication_middleware(app)
    app.include_router(router)

    @app.get("/health/live")
    async def health_live() -> Dict[str, str]:
        """Эндпоинт для проверки, что процесс живой."""
        return {"status": "live"}

    @app.get("/health/ready")
    async def health_ready() -> Dict[str, str]:
        """Эндпоинт для проверки готовности приложения."""
        return {"status": "ready"}

    @app.on_event("startup")
    async def on_startup() -> None:
        """Создает схему (если включено) и выводит информацию при старте."""
        if settings.create_schema:
            async with container.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info(
            "Сервис %s запущен на %s:%s с БД %s",
            settings.app_name,
            settings.app_host,
            settings.app_port,
            make_url(settings.database_url).render_as_string(hide_password=True),
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Закрывает пул соединений."""
        await container.engine.dispose()
        logger.info("Сервис %s завершает работу", settings.app_name)

    return app


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(create_app(_settings), host=_settings.app_host, port=_settings.app_port)
