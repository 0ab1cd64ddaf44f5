"""
Страницы управления ролями.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from rolebook.api.dependencies import get_role_view
from rolebook.api.views.crud_view import CrudView
from rolebook.application.dto import RoleDTO, id_or_raw, parse_id
from rolebook.shared.exceptions.domain_exceptions import DomainValidationError

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("", response_class=HTMLResponse)
async def list_roles(request: Request, view: CrudView = Depends(get_role_view)):
    """Список ролей и форма создания/изменения."""
    return await view.list_page(parse_id(request.query_params.get("id")))


@router.post("/create")
async def create_role(request: Request, view: CrudView = Depends(get_role_view)):
    """Создать роль."""
    role = view.service.for_create(RoleDTO.from_form(await request.form()))
    try:
        view.service.validate(role, creating=True)
        role = await view.service.create(role)
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("role.successMessage.create", role.name))
    return view.redirect()


@router.post("/update")
async def update_role(request: Request, view: CrudView = Depends(get_role_view)):
    """Изменить роль; в сообщении перечисляются люди с этой ролью."""
    role = RoleDTO.from_form(await request.form())
    try:
        view.service.validate(role)
        role = await view.service.update(role)
    except DomainValidationError as error:
        return await view.render_error(error)

    message = view.message("role.successMessage.update", role.name)
    if role.persons:
        person_names = "; ".join(person.name for person in role.persons)
        message += " " + view.message("role.successMessage.affectedPersons", person_names)
    view.flash(message)
    return view.redirect()


@router.post("/delete")
async def delete_role(request: Request, view: CrudView = Depends(get_role_view)):
    """Удалить роль. Назначенную роль удалить нельзя."""
    view.force_create_mode()
    form = await request.form()
    try:
        role = await view.service.delete(id_or_raw(form.get("id")))
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("role.successMessage.delete", role.name))
    return view.redirect()
