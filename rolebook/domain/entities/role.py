# -*- coding: utf-8 -*-
"""
Доменная сущность: Роль (Role)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from rolebook.domain.value_objects.entity_ref import EntityRef


@dataclass
class Role:
    """
    Доменная сущность роли.

    Инварианты:
    - ID назначается хранилищем при создании и больше не меняется
    - Имя роли уникально
    """

    id: Optional[int] = None
    name: str = ""

    # Люди, которым назначена роль (только для чтения)
    persons: List[EntityRef] = field(default_factory=list)

    def person_names(self) -> List[str]:
        """Отображаемые имена людей с этой ролью."""
        return [str(person) for person in self.persons]

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name='{self.name}')"
