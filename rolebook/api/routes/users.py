"""
Страницы управления пользователями.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from rolebook.api.dependencies import get_user_view
from rolebook.api.views.crud_view import CrudView
from rolebook.application.dto import UserDTO, id_or_raw, parse_id
from rolebook.shared.exceptions.domain_exceptions import DomainValidationError

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_class=HTMLResponse)
async def list_users(request: Request, view: CrudView = Depends(get_user_view)):
    return await view.list_page(parse_id(request.query_params.get("id")))


@router.post("/create")
async def create_user(request: Request, view: CrudView = Depends(get_user_view)):
    user = view.service.for_create(UserDTO.from_form(await request.form()))
    try:
        view.service.validate(user, creating=True)
        user = await view.service.create(user)
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("user.successMessage.create", user.username))
    return view.redirect()


@router.post("/update")
async def update_user(request: Request, view: CrudView = Depends(get_user_view)):
    """Изменить пользователя; пустой пароль оставляет прежний."""
    user = UserDTO.from_form(await request.form())
    try:
        view.service.validate(user)
        user = await view.service.update(user)
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("user.successMessage.update", user.username))
    return view.redirect()


@router.post("/delete")
async def delete_user(request: Request, view: CrudView = Depends(get_user_view)):
    view.force_create_mode()
    form = await request.form()
    try:
        user = await view.service.delete(id_or_raw(form.get("id")))
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("user.successMessage.delete", user.username))
    return view.redirect()
