"""
DTO (Data Transfer Objects) для слоя представления.

Плоские копии полей сущностей. Создаются на каждый запрос и никогда
не сохраняются напрямую: преобразование выполняют ассемблеры.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


def parse_id(value: Any) -> Optional[int]:
    """
    Разобрать идентификатор из строки запроса или формы.

    Возвращает:
        int, либо None для пустого или некорректного значения
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def id_or_raw(value: Any) -> Any:
    """ID, либо исходное значение, если это не число (попадёт в сообщение NotFound)."""
    record_id = parse_id(value)
    return value if record_id is None else record_id


def _text(form, key: str) -> str:
    value = form.get(key)
    return "" if value is None else str(value)


class RefDTO(BaseModel):
    """Ссылка на связанную запись: ID и отображаемое имя."""

    id: int
    name: Optional[str] = None


class RoleDTO(BaseModel):
    """Роль."""

    id: Optional[int] = None
    name: str = ""
    persons: List[RefDTO] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name

    @classmethod
    def from_form(cls, form) -> "RoleDTO":
        """Создать из полей формы (значения сохраняются как введены)."""
        return cls(id=parse_id(form.get("id")), name=_text(form, "name"))


class PersonDTO(BaseModel):
    """Человек и его роли."""

    id: Optional[int] = None
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    roles: List[RefDTO] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)

    @property
    def role_ids(self) -> List[int]:
        return [role.id for role in self.roles]

    @classmethod
    def from_form(cls, form) -> "PersonDTO":
        """Создать из полей формы; роли приходят списком role_ids."""
        role_ids = []
        for value in form.getlist("role_ids"):
            role_id = parse_id(value)
            if role_id is not None and role_id not in role_ids:
                role_ids.append(role_id)

        return cls(
            id=parse_id(form.get("id")),
            first_name=_text(form, "first_name"),
            middle_name=_text(form, "middle_name"),
            last_name=_text(form, "last_name"),
            roles=[RefDTO(id=role_id) for role_id in role_ids],
        )


class UserDTO(BaseModel):
    """Пользователь. Пароль в DTO после чтения из хранилища — это хэш."""

    id: Optional[int] = None
    username: str = ""
    password: str = ""

    @property
    def display_name(self) -> str:
        return self.username

    @classmethod
    def from_form(cls, form) -> "UserDTO":
        return cls(
            id=parse_id(form.get("id")),
            username=_text(form, "username"),
            password=_text(form, "password"),
        )
