# -*- coding: utf-8 -*-
"""
Доменная сущность: Человек (Person)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from rolebook.domain.value_objects.entity_ref import EntityRef
from rolebook.domain.value_objects.person_name import PersonName


@dataclass
class Person:
    """
    Доменная сущность человека.

    Инварианты:
    - ID назначается хранилищем при создании и больше не меняется
    - Имя и фамилия обязательны
    """

    id: Optional[int] = None
    name: PersonName = field(default_factory=lambda: PersonName("", ""))

    # Назначенные роли (many-to-many через person_roles)
    roles: List[EntityRef] = field(default_factory=list)

    @property
    def role_ids(self) -> List[int]:
        return [role.id for role in self.roles]

    def __repr__(self) -> str:
        return f"Person(id={self.id}, name='{self.name}')"
