"""
Страницы управления людьми.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from rolebook.api.dependencies import get_person_view
from rolebook.api.views.crud_view import CrudView
from rolebook.application.dto import PersonDTO, id_or_raw, parse_id
from rolebook.shared.exceptions.domain_exceptions import DomainValidationError

router = APIRouter(prefix="/persons", tags=["persons"])


def _with_affected_roles(view: CrudView, message: str, person: PersonDTO) -> str:
    if person.roles:
        role_names = "; ".join(role.name or str(role.id) for role in person.roles)
        message += " " + view.message("person.successMessage.affectedRoles", role_names)
    return message


@router.get("", response_class=HTMLResponse)
async def list_persons(request: Request, view: CrudView = Depends(get_person_view)):
    """Список людей и форма создания/изменения."""
    return await view.list_page(parse_id(request.query_params.get("id")))


@router.post("/create")
async def create_person(request: Request, view: CrudView = Depends(get_person_view)):
    person = view.service.for_create(PersonDTO.from_form(await request.form()))
    try:
        view.service.validate(person, creating=True)
        person = await view.service.create(person)
    except DomainValidationError as error:
        return await view.render_error(error)

    view.flash(view.message("person.successMessage.create", person.display_name))
    return view.redirect()


@router.post("/update")
async def update_person(request: Request, view: CrudView = Depends(get_person_view)):
    person = PersonDTO.from_form(await request.form())
    try:
        view.service.validate(person)
        person = await view.service.update(person)
    except DomainValidationError as error:
        return await view.render_error(error)

    message = view.message("person.successMessage.update", person.display_name)
    view.flash(_with_affected_roles(view, message, person))
    return view.redirect()


@router.post("/delete")
async def delete_person(request: Request, view: CrudView = Depends(get_person_view)):
    view.force_create_mode()
    form = await request.form()
    try:
        person = await view.service.delete(id_or_raw(form.get("id")))
    except DomainValidationError as error:
        return await view.render_error(error)

    message = view.message("person.successMessage.delete", person.display_name)
    view.flash(_with_affected_roles(view, message, person))
    return view.redirect()
