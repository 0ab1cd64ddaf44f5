"""
Value Object: PersonName

Полное имя человека.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PersonName:
    """Имя, отчество/второе имя и фамилия."""

    first_name: str
    last_name: str
    middle_name: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)
