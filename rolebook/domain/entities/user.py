# -*- coding: utf-8 -*-
"""
Доменная сущность: Пользователь (User)
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Доменная сущность пользователя.

    Инварианты:
    - Логин уникален
    - Пароль хранится только в виде SHA-256 хэша
    """

    id: Optional[int] = None
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        # пароль не выводим
        return f"User(id={self.id}, username='{self.username}')"
