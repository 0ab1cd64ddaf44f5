# -*- coding: utf-8 -*-
"""
Каталог сообщений с поддержкой локалей.

Сообщения хранятся в YAML файлах messages/messages_<locale>.yaml
(плоский словарь ключ → шаблон с позиционными {0}, {1}, ...).
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import yaml

from rolebook.application.validation import LOCALIZE_PREFIX
from rolebook.shared.exceptions.domain_exceptions import MessageError

logger = logging.getLogger(__name__)

MESSAGES_DIR = Path(__file__).parent / "messages"


class MessageSource:
    """
    Поиск сообщений по ключу для локали.

    Порядок поиска: запрошенная локаль → локаль по умолчанию → сам ключ.
    """

    def __init__(self, catalogs: Dict[str, Dict[str, str]], default_locale: str = "en"):
        self.catalogs = catalogs
        self.default_locale = default_locale

    @classmethod
    def from_directory(cls, directory: Path = MESSAGES_DIR, default_locale: str = "en") -> "MessageSource":
        """Загрузить все messages_*.yaml из каталога."""
        catalogs: Dict[str, Dict[str, str]] = {}
        for path in sorted(directory.glob("messages_*.yaml")):
            locale = path.stem.split("_", 1)[1]
            with path.open(encoding="utf-8") as f:
                catalogs[locale] = {str(k): str(v) for k, v in (yaml.safe_load(f) or {}).items()}
            logger.debug(f"Загружен каталог {path.name}: {len(catalogs[locale])} сообщений")
        return cls(catalogs, default_locale)

    @property
    def locales(self) -> List[str]:
        return sorted(self.catalogs)

    def resolve_locale(self, locale: Optional[str]) -> str:
        """Поддерживаемая локаль: 'ru_RU' → 'ru', неизвестная → по умолчанию."""
        if locale:
            candidate = locale.replace("-", "_").split("_")[0].lower()
            if candidate in self.catalogs:
                return candidate
        return self.default_locale

    def get_message(self, key: str, args: Sequence[Any] = (), locale: Optional[str] = None) -> str:
        """
        Найти и отформатировать сообщение.

        Аргументы вида "localize:<ключ>" сначала локализуются сами.
        """
        locale = self.resolve_locale(locale)
        template = self._lookup(key, locale)
        values = [self._localize_arg(arg, locale) for arg in args]
        try:
            return template.format(*values)
        except (IndexError, KeyError, ValueError):
            logger.warning(f"Некорректный шаблон сообщения {key!r} для локали {locale}")
            return template

    def localize(self, errors: Iterable[MessageError], locale: Optional[str] = None) -> List[str]:
        """Локализовать список ошибок в том же порядке."""
        return [self.get_message(error.code, error.args, locale) for error in errors]

    def _lookup(self, key: str, locale: str) -> str:
        for candidate in (locale, self.default_locale):
            catalog = self.catalogs.get(candidate, {})
            if key in catalog:
                return catalog[key]
        return key

    def _localize_arg(self, arg: Any, locale: str) -> Any:
        if isinstance(arg, str) and arg.startswith(LOCALIZE_PREFIX):
            return self._lookup(arg[len(LOCALIZE_PREFIX):], locale)
        return arg


@lru_cache()
def get_message_source() -> MessageSource:
    """Каталог сообщений приложения (загружается один раз)."""
    from rolebook.infrastructure.config.settings import get_settings

    return MessageSource.from_directory(default_locale=get_settings().default_locale)
