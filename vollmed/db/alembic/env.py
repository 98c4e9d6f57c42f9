"""
Alembic окружение для таблиц API Voll.med.

URL БД берется из DatabaseSettings (DATABASE_URL или .env),
поэтому для миграций не нужен JWT_SECRET.
"""
import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from vollmed.config import DatabaseSettings
from vollmed.db.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def migrate_offline(url: str) -> None:
    """Печатает SQL миграций без подключения к БД."""
    _configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _migrate_with(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online(url: str) -> None:
    # NullPool: соединение нужно только на время миграции
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_with)
    finally:
        await engine.dispose()


database_url = DatabaseSettings().database_url

if context.is_offline_mode():
    migrate_offline(database_url)
else:
    asyncio.run(migrate_online(database_url))
