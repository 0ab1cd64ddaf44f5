"""
Database configuration.
"""

import logging
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from rolebook.infrastructure.config.settings import get_settings
from rolebook.infrastructure.persistence.models import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite не проверяет внешние ключи без этого PRAGMA
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Создать асинхронный engine для URL с асинхронным драйвером."""
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=20,
        max_overflow=10
    )


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    """Фабрика сессий, привязанная к engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


def get_engine() -> AsyncEngine:
    """Engine по умолчанию (создаётся лениво из настроек)."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = make_engine(settings.get_async_database_url(), echo=settings.database_echo)
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = make_sessionmaker(get_engine())
    return _session_factory


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    """Создать таблицы, если их ещё нет."""
    engine = engine or get_engine()
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Схема БД инициализирована")


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Dependency для получения DB session."""
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()
