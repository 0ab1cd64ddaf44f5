"""
FastAPI Dependencies для DI.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rolebook.api.views.crud_view import CrudView
from rolebook.application.services.person_service import PersonService
from rolebook.application.services.role_service import RoleService
from rolebook.application.services.user_service import UserService
from rolebook.infrastructure.config.database import get_db_session
from rolebook.infrastructure.config.settings import get_settings
from rolebook.infrastructure.i18n.message_source import MessageSource, get_message_source
from rolebook.infrastructure.persistence.person_repository_impl import PersonRepositoryImpl
from rolebook.infrastructure.persistence.role_repository_impl import RoleRepositoryImpl
from rolebook.infrastructure.persistence.user_repository_impl import UserRepositoryImpl


def get_locale(request: Request) -> str:
    """Локаль, выбранная middleware."""
    return getattr(request.state, "locale", get_settings().default_locale)


async def get_role_service(session: AsyncSession = Depends(get_db_session)) -> RoleService:
    """DI для service ролей."""
    return RoleService(RoleRepositoryImpl(session), get_settings().max_field_length)


async def get_person_service(session: AsyncSession = Depends(get_db_session)) -> PersonService:
    """DI для service людей."""
    return PersonService(PersonRepositoryImpl(session), get_settings().max_field_length)


async def get_user_service(session: AsyncSession = Depends(get_db_session)) -> UserService:
    """DI для service пользователей."""
    return UserService(UserRepositoryImpl(session), get_settings().max_field_length)


async def get_role_view(
    request: Request,
    service: RoleService = Depends(get_role_service),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_locale)
) -> CrudView:
    return CrudView(request, service, messages, locale, resource="role", path="/roles", template="role.html")


async def get_person_view(
    request: Request,
    service: PersonService = Depends(get_person_service),
    role_service: RoleService = Depends(get_role_service),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_locale)
) -> CrudView:

    async def available_roles():
        return {"roles": await role_service.list()}

    return CrudView(
        request, service, messages, locale,
        resource="person", path="/persons", template="person.html",
        extra_context=available_roles,
    )


async def get_user_view(
    request: Request,
    service: UserService = Depends(get_user_service),
    messages: MessageSource = Depends(get_message_source),
    locale: str = Depends(get_locale)
) -> CrudView:
    return CrudView(request, service, messages, locale, resource="user", path="/users", template="user.html")
