# -*- coding: utf-8 -*-
"""
Общий контроллер страниц CRUD: список + форма создания/изменения.

Цикл запроса: список → отправка формы → успех (редирект 303)
или ошибка валидации (та же страница с ошибками, HTTP 400).
"""

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from rolebook.application.services.crud_service import CrudService
from rolebook.infrastructure.config.settings import get_settings
from rolebook.infrastructure.i18n.message_source import MessageSource
from rolebook.shared.exceptions.domain_exceptions import DomainValidationError, EntityNotFoundError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

SUCCESS_MESSAGE = "successMessage"

_jinja_env: Optional[Environment] = None


def get_jinja_env() -> Environment:
    """Jinja2 окружение для шаблонов страниц (создаётся один раз)."""
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
    return _jinja_env


class CrudView:
    """
    Контроллер страницы одного ресурса.

    Атрибуты:
        resource: Префикс ключей сообщений (role, person, user)
        path: URL списка (/roles)
        template: Имя шаблона страницы
    """

    def __init__(
        self,
        request: Request,
        service: CrudService,
        messages: MessageSource,
        locale: str,
        resource: str,
        path: str,
        template: str,
        extra_context: Optional[Callable[[], Awaitable[Dict[str, Any]]]] = None
    ):
        self.request = request
        self.service = service
        self.messages = messages
        self.locale = locale
        self.resource = resource
        self.path = path
        self.template = template
        self.extra_context = extra_context

    # =========================================================================
    # Режим формы
    # =========================================================================

    @property
    def forced_create_mode(self) -> bool:
        return getattr(self.request.state, "force_create_mode", False)

    def force_create_mode(self) -> None:
        """Отбросить контекст редактирования: запись больше не существует."""
        self.request.state.force_create_mode = True

    # =========================================================================
    # Сообщения
    # =========================================================================

    def message(self, key: str, *args: Any) -> str:
        """Сообщение в локали запроса."""
        return self.messages.get_message(key, args, self.locale)

    def flash(self, message: str) -> None:
        """Сообщение об успехе для однократного показа после редиректа."""
        self.request.session[SUCCESS_MESSAGE] = message

    def redirect(self) -> RedirectResponse:
        return RedirectResponse(self.path, status_code=303)

    # =========================================================================
    # Страницы
    # =========================================================================

    async def list_page(self, record_id: Optional[int]) -> HTMLResponse:
        """
        GET список.

        Без ID или в принудительном режиме создания — пустая форма создания;
        иначе форма изменения, если запись нашлась.
        """
        try:
            context = await self._build_context(record_id)
        except DomainValidationError as error:
            return await self.render_error(error)
        return self.render(context)

    async def render_error(self, error: DomainValidationError) -> HTMLResponse:
        """
        Перевод доменной ошибки в страницу с сообщениями (HTTP 400).

        Введённые значения сохраняются, кроме принудительного режима создания.
        Копия сообщений на языке операторов пишется в лог.
        """
        record_id = getattr(error.target, "id", None)
        try:
            context = await self._build_context(record_id)
        except EntityNotFoundError:
            # запись удалили, пока обрабатывался запрос
            context = await self._build_context(None)

        if not self.forced_create_mode and error.target is not None:
            context["command"] = error.target
        context["error_messages"] = self.messages.localize(error.errors, self.locale)

        operator_locale = get_settings().operator_locale
        for message in self.messages.localize(error.errors, operator_locale):
            logger.info(message, exc_info=error)

        return self.render(context, status_code=400)

    def render(self, context: Dict[str, Any], status_code: int = 200) -> HTMLResponse:
        """Отрисовать шаблон ресурса в HTMLResponse."""
        ctx = {
            "t": self.message,
            "locale": self.locale,
            "locales": self.messages.locales,
            "resource": self.resource,
            "path": self.path,
            "error_messages": [],
            **context,
        }
        template = get_jinja_env().get_template(self.template)
        return HTMLResponse(content=template.render(**ctx), status_code=status_code)

    async def _build_context(self, record_id: Optional[int]) -> Dict[str, Any]:
        if self.forced_create_mode or record_id is None:
            mode = "create"
            command = self.service.new_dto()
        else:
            try:
                command = await self.service.get(record_id)
            except EntityNotFoundError:
                self.force_create_mode()
                raise
            mode = "update"

        context = {
            "header_title": self.message(f"{self.resource}.headerTitle.{mode}"),
            "action": f"{self.path}/{mode}",
            "mode": mode,
            "command": command,
            "data": await self.service.list(),
            "success_message": self.request.session.pop(SUCCESS_MESSAGE, None),
        }
        if self.extra_context is not None:
            context.update(await self.extra_context())
        return context
