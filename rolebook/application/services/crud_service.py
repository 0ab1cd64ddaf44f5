"""
Generic CRUD Application Service.

Координирует валидацию, ассемблер и repository. Ошибки хранилища
перехватываются на границе сервиса и превращаются в доменные ошибки
через таблицу обработчиков, заданную для каждого типа сущности.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from rolebook.application.assemblers import Assembler
from rolebook.application.validation import Validator
from rolebook.domain.repositories.repository import IRepository
from rolebook.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    FieldValidationError,
)
from rolebook.shared.exceptions.infrastructure_exceptions import (
    DuplicateKeyError,
    RecordNotFoundError,
    ReferentialConstraintError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")
D = TypeVar("D")

DUPLICATE_ENTRY = "validation.message.duplicateEntry"
NOT_FOUND = "validation.message.notFound"
IN_USE = "validation.message.inUse"


class FailureKind(str, Enum):
    """Виды ошибок хранилища, которые переводятся в доменные."""

    DUPLICATE = "duplicate"    # (entity, DuplicateKeyError)
    NOT_FOUND = "not_found"    # (id, RecordNotFoundError)
    IN_USE = "in_use"          # (entity, ReferentialConstraintError)


# Обработчик получает субъект (сущность или ID) и исходную ошибку.
# None означает "использовать обработчик по умолчанию".
FailureHook = Callable[[Any, Exception], Optional[DomainValidationError]]
FailureHooks = Mapping[FailureKind, FailureHook]


class CrudService(Generic[E, D]):
    """
    Application Service для create/update/get/list/delete.

    Побочные эффекты: ровно одна мутация хранилища на вызов.
    Любая ошибка, кроме ошибок хранилища из контракта repository,
    пробрасывается без изменений.
    """

    def __init__(
        self,
        repository: IRepository[E],
        assembler: Assembler[E, D],
        dto_factory: Callable[[], D],
        validator: Optional[Validator] = None,
        failure_hooks: Optional[FailureHooks] = None,
        create_validator: Optional[Validator] = None
    ):
        self.repository = repository
        self.assembler = assembler
        self.dto_factory = dto_factory
        self.validator = validator
        self.create_validator = create_validator
        self.failure_hooks: Dict[FailureKind, FailureHook] = dict(failure_hooks or {})

    def new_dto(self) -> D:
        """Пустой DTO для формы создания."""
        return self.dto_factory()

    def for_create(self, dto: D) -> D:
        """Копия DTO без ID: при создании ID назначает хранилище."""
        return dto.model_copy(update={"id": None})

    def validate(self, dto: D, creating: bool = False) -> None:
        """
        Проверить поля DTO, не обращаясь к хранилищу.

        creating добавляет проверки, которые действуют только при создании.

        Raises:
            FieldValidationError: Если есть ошибки; target — переданный DTO
        """
        errors = []
        if self.validator is not None:
            errors.extend(self.validator(dto))
        if creating and self.create_validator is not None:
            errors.extend(self.create_validator(dto))
        if errors:
            raise FieldValidationError(errors, dto)

    async def create(self, dto: D) -> D:
        """Создать запись. ID назначает хранилище."""
        dto = self.for_create(dto)
        self.validate(dto, creating=True)
        entity = self.assembler.to_entity(dto)

        try:
            created = await self.repository.create(entity)
        except DuplicateKeyError as cause:
            raise self._fail(FailureKind.DUPLICATE, entity, cause) from cause
        except RecordNotFoundError as cause:
            raise self._fail(FailureKind.NOT_FOUND, entity.id, cause, submitted=dto) from cause

        logger.info(f"Создано: {created!r}")
        return self.assembler.to_dto(created)

    async def update(self, dto: D) -> D:
        """Обновить запись с существующим ID; возвращает обновлённый DTO."""
        self.validate(dto)
        entity = self.assembler.to_entity(dto)

        try:
            updated = await self.repository.update(entity)
        except RecordNotFoundError as cause:
            raise self._fail(FailureKind.NOT_FOUND, entity.id, cause, submitted=dto) from cause
        except DuplicateKeyError as cause:
            raise self._fail(FailureKind.DUPLICATE, entity, cause) from cause

        logger.info(f"Обновлено: {updated!r}")
        return self.assembler.to_dto(updated)

    async def get(self, entity_id: int) -> D:
        """Получить запись по ID."""
        return self.assembler.to_dto(await self._get_entity(entity_id))

    async def list(self) -> List[D]:
        """Все записи в порядке, который вернуло хранилище."""
        return self.assembler.to_dtos(await self.repository.list())

    async def delete(self, entity_id: int) -> D:
        """
        Удалить запись.

        Returns:
            DTO удалённой записи (для сообщения об успехе)

        Raises:
            EntityNotFoundError: Записи нет
            EntityInUseError: На запись ссылаются другие записи
        """
        entity = await self._get_entity(entity_id)

        try:
            await self.repository.delete(entity_id)
        except ReferentialConstraintError as cause:
            raise self._fail(FailureKind.IN_USE, entity, cause) from cause
        except RecordNotFoundError as cause:
            raise self._fail(FailureKind.NOT_FOUND, entity_id, cause) from cause

        logger.info(f"Удалено: {entity!r}")
        return self.assembler.to_dto(entity)

    # =========================================================================
    # Перевод ошибок хранилища
    # =========================================================================

    async def _get_entity(self, entity_id: Optional[int]) -> E:
        try:
            return await self.repository.get(entity_id)
        except RecordNotFoundError as cause:
            raise self._fail(FailureKind.NOT_FOUND, entity_id, cause) from cause

    def _fail(
        self,
        kind: FailureKind,
        subject: Any,
        cause: Exception,
        submitted: Optional[D] = None
    ) -> DomainValidationError:
        """
        Доменная ошибка для ошибки хранилища.

        Ошибка без target получает отправленный DTO, чтобы форма сохранила ввод.
        """
        if kind is FailureKind.NOT_FOUND and subject is None:
            # некорректный ID из формы: в сообщении пустое значение
            subject = ""
        hook = self.failure_hooks.get(kind)
        error = hook(subject, cause) if hook else None
        if error is None:
            error = self._default_failure(kind, subject)
        if error.target is None:
            error.target = submitted
        return error

    def _default_failure(self, kind: FailureKind, subject: Any) -> DomainValidationError:
        if kind is FailureKind.NOT_FOUND:
            return EntityNotFoundError.of(NOT_FOUND, self.new_dto(), subject)
        target = self.assembler.to_dto(subject)
        if kind is FailureKind.DUPLICATE:
            return DuplicateEntityError.of(DUPLICATE_ENTRY, target)
        return EntityInUseError.of(IN_USE, target, subject.id)
