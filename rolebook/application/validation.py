"""
Валидация полей DTO.

Валидатор — это функция DTO → список MessageError. Ошибки копятся,
а не прерывают проверку, чтобы форма показала все проблемы сразу.
Аргумент вида "localize:<ключ>" локализуется при отображении.
"""

from typing import Any, Callable, List, Optional

from rolebook.shared.exceptions.domain_exceptions import MessageError

Validator = Callable[[Any], List[MessageError]]

LOCALIZE_PREFIX = "localize:"

NOT_EMPTY = "validation.message.notEmpty"
MAX_LENGTH = "validation.message.maxLength"


def localizable(key: str) -> str:
    """Аргумент сообщения, который сам является ключом каталога."""
    return f"{LOCALIZE_PREFIX}{key}"


def check_not_empty(value: Optional[str], field: str, errors: List[MessageError], label_key: str) -> bool:
    """Поле обязательно: пустая строка или одни пробелы — ошибка."""
    if value is None or not value.strip():
        errors.append(MessageError(NOT_EMPTY, (localizable(label_key),), field))
        return False
    return True


def check_max_length(
    value: Optional[str],
    field: str,
    errors: List[MessageError],
    max_length: int,
    label_key: str
) -> bool:
    """Длина поля не больше max_length символов."""
    if value is not None and len(value) > max_length:
        errors.append(MessageError(MAX_LENGTH, (localizable(label_key), max_length), field))
        return False
    return True

