"""
Infrastructure Exceptions

Исключения инфраструктурного слоя.
Поднимаются репозиториями вместо сырых ошибок SQLAlchemy.
"""

from typing import Any, Optional


class InfrastructureException(Exception):
    """Базовое исключение инфраструктуры."""
    pass


class DatabaseError(InfrastructureException):
    """Ошибка работы с БД."""
    pass


class RecordNotFoundError(DatabaseError):
    """Запись с указанным идентификатором отсутствует."""

    def __init__(self, model: str, record_id: Any):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model} with id {record_id!r} not found")


class DuplicateKeyError(DatabaseError):
    """Нарушено ограничение уникальности."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ReferentialConstraintError(DatabaseError):
    """Нарушено ограничение внешнего ключа."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
