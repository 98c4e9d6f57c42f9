"""Общие фикстуры: приложение на временной SQLite БД."""
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from vollmed.config import Settings
from vollmed.main import create_app

TEST_SECRET = "test-secret-key-for-vollmed-api-0123456789"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Настройки для тестов.

    Используем sqlite во временном файле, схема создается при старте,
    bcrypt с минимальным числом раундов для скорости.
    """
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vollmed.db'}",
        create_schema=True,
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """Создает тестовый клиент с чистой БД на каждый тест."""
    with TestClient(create_app(settings)) as c:
        yield c
