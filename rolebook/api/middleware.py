"""
HTTP middleware: выбор локали запроса.

Порядок: параметр ?language=xx (запоминается в cookie) → cookie → локаль по умолчанию.
"""

import logging
from typing import Callable

from fastapi import Request

from rolebook.infrastructure.config.settings import get_settings
from rolebook.infrastructure.i18n.message_source import get_message_source

logger = logging.getLogger(__name__)


async def resolve_locale(request: Request, call_next: Callable):
    settings = get_settings()
    messages = get_message_source()

    requested = request.query_params.get(settings.locale_param)
    stored = request.cookies.get(settings.locale_cookie_name)
    locale = messages.resolve_locale(requested or stored or settings.default_locale)
    request.state.locale = locale

    response = await call_next(request)

    if requested:
        response.set_cookie(
            settings.locale_cookie_name,
            locale,
            max_age=settings.locale_cookie_max_age,
            httponly=True,
            samesite="lax",
        )
    return response


async def log_unexpected_errors(request: Request, call_next: Callable):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"Unhandled exception in {request.method} {request.url.path}: {str(e)}", exc_info=True)
        raise
