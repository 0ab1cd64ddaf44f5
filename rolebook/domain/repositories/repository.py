"""
Repository Interface: IRepository

Порт (интерфейс) для работы с хранилищем сущностей.
Реализации (адаптеры) находятся в infrastructure layer.

Все методы могут завершиться одним из исключений хранилища:
RecordNotFoundError, DuplicateKeyError, ReferentialConstraintError.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

E = TypeVar("E")


class IRepository(ABC, Generic[E]):
    """
    Интерфейс репозитория CRUD.

    Следует Repository Pattern и является портом в Hexagonal Architecture.
    """

    @abstractmethod
    async def create(self, entity: E) -> E:
        """
        Сохранить новую сущность.

        Args:
            entity: Сущность без ID

        Returns:
            Сохранённая сущность с ID, назначенным хранилищем

        Raises:
            DuplicateKeyError: Нарушено ограничение уникальности
        """
        pass

    @abstractmethod
    async def update(self, entity: E) -> E:
        """
        Обновить существующую сущность.

        Raises:
            RecordNotFoundError: Записи с таким ID нет
            DuplicateKeyError: Нарушено ограничение уникальности
        """
        pass

    @abstractmethod
    async def get(self, entity_id: int) -> E:
        """
        Получить сущность по ID.

        Raises:
            RecordNotFoundError: Записи с таким ID нет
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> None:
        """
        Удалить сущность по ID.

        Raises:
            RecordNotFoundError: Записи с таким ID нет
            ReferentialConstraintError: На запись ссылаются другие записи
        """
        pass

    @abstractmethod
    async def list(self) -> List[E]:
        """Получить все сущности в порядке ID."""
        pass
