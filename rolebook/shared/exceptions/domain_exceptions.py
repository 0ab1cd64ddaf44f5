"""
Domain Exceptions

Исключения доменного слоя.

Все пользовательские ошибки несут ключ сообщения и позиционные аргументы,
которые локализуются только в момент отображения.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


@dataclass(frozen=True)
class MessageError:
    """
    Ошибка поля или объекта.

    Атрибуты:
        code: Ключ сообщения в каталоге (например, role.validation.message.notFound)
        args: Позиционные аргументы для подстановки
        field: Имя поля формы или None для ошибки объекта
    """

    code: str
    args: tuple = field(default_factory=tuple)
    field: Optional[str] = None


class DomainException(Exception):
    """Базовое исключение домена."""
    pass


class DomainValidationError(DomainException):
    """
    Ошибка валидации, показываемая пользователю.

    Несёт список ошибок и исходный DTO (target) для повторного отображения формы.
    """

    def __init__(self, errors: Sequence[MessageError], target: Any = None):
        self.errors: List[MessageError] = list(errors)
        self.target = target
        super().__init__(", ".join(error.code for error in self.errors))

    @classmethod
    def of(cls, code: str, target: Any = None, *args: Any) -> "DomainValidationError":
        """Создать ошибку с одним сообщением уровня объекта."""
        return cls([MessageError(code, tuple(args))], target)


class FieldValidationError(DomainValidationError):
    """Ошибка валидации полей формы (до обращения к хранилищу)."""
    pass


class EntityNotFoundError(DomainValidationError):
    """Сущность не найдена."""
    pass


class DuplicateEntityError(DomainValidationError):
    """Дубликат сущности."""
    pass


class EntityInUseError(DomainValidationError):
    """Сущность используется другими записями и не может быть удалена."""
    pass
