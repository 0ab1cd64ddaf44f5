"""
Value Object: EntityRef

Ссылка на связанную сущность: идентификатор и отображаемое имя.
Используется вместо живых объектов, чтобы связи Role ↔ Person не образовывали циклов.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EntityRef:
    """Ссылка на связанную запись."""

    id: int
    name: Optional[str] = None

    def __str__(self) -> str:
        return self.name if self.name is not None else str(self.id)
