# -*- coding: utf-8 -*-
"""
Базовая реализация repository на SQLAlchemy.

Переводит ошибки SQLAlchemy в исключения хранилища:
- IntegrityError (уникальность)   → DuplicateKeyError
- IntegrityError (внешний ключ)   → ReferentialConstraintError
- отсутствующая запись            → RecordNotFoundError
Остальные ошибки пробрасываются без изменений.
"""

import logging
from abc import abstractmethod
from typing import List, Optional, Type

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rolebook.domain.repositories.repository import E, IRepository
from rolebook.shared.exceptions.infrastructure_exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    ReferentialConstraintError,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(error: IntegrityError):
    """SQLSTATE ошибки драйвера (asyncpg), если он его сообщает."""
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return code
    return None


def translate_integrity_error(error: IntegrityError) -> Optional[Exception]:
    """
    Классифицировать IntegrityError.

    Возвращает:
        DuplicateKeyError / ReferentialConstraintError,
        либо None, если класс нарушения не распознан
    """
    code = _sqlstate(error)
    message = str(error.orig).lower()

    if code == FOREIGN_KEY_VIOLATION or "foreign key" in message:
        return ReferentialConstraintError(str(error.orig), error)
    if code == UNIQUE_VIOLATION or "unique" in message or "duplicate key" in message:
        return DuplicateKeyError(str(error.orig), error)
    return None


class SqlAlchemyRepository(IRepository[E]):
    """
    Общая реализация CRUD для SQLAlchemy модели с целочисленным ID.

    Наследники задают model и маппинг Entity ↔ Model.
    """

    model: Type = None
    entity_name: str = ""

    def __init__(self, session: AsyncSession):
        """
        Инициализация репозитория.

        Аргументы:
            session: Асинхронная сессия SQLAlchemy
        """
        self.session = session

    async def create(self, entity: E) -> E:
        model = self.model()
        await self._fill_model(model, entity)
        self.session.add(model)
        await self._commit()
        await self.session.refresh(model)
        return self._to_entity(model)

    async def update(self, entity: E) -> E:
        model = await self._get_model(entity.id)
        await self._fill_model(model, entity)
        await self._commit()
        return self._to_entity(model)

    async def get(self, entity_id: int) -> E:
        return self._to_entity(await self._get_model(entity_id))

    async def delete(self, entity_id: int) -> None:
        # Core-запрос: каскады ORM не вмешиваются, ограничения проверяет БД
        try:
            result = await self.session.execute(
                delete(self.model).where(self.model.id == entity_id)
            )
        except IntegrityError as error:
            await self._rollback_and_raise(error)
        await self._commit()

        if result.rowcount == 0:
            raise RecordNotFoundError(self.entity_name, entity_id)

    async def list(self) -> List[E]:
        result = await self.session.execute(
            select(self.model).order_by(self.model.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    # =========================================================================
    # Вспомогательные методы
    # =========================================================================

    async def _get_model(self, entity_id: int):
        model = await self.session.get(self.model, entity_id) if isinstance(entity_id, int) else None
        if model is None:
            raise RecordNotFoundError(self.entity_name, entity_id)
        return model

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as error:
            await self._rollback_and_raise(error)

    async def _rollback_and_raise(self, error: IntegrityError) -> None:
        await self.session.rollback()
        translated = translate_integrity_error(error)
        if translated is None:
            raise error
        logger.debug(f"{self.entity_name}: {type(translated).__name__}: {translated}")
        raise translated from error

    # =========================================================================
    # Маппинг Entity ↔ Model
    # =========================================================================

    @abstractmethod
    async def _fill_model(self, model, entity: E) -> None:
        """Перенести поля сущности в модель (ID не переносится)."""
        pass

    @abstractmethod
    def _to_entity(self, model) -> E:
        """Конвертация SQLAlchemy модели → доменная сущность."""
        pass
