"""
Unit tests для DTO и разбора форм.
"""

import pytest
from starlette.datastructures import FormData

from rolebook.application.assemblers import PersonAssembler, RoleAssembler, UserAssembler
from rolebook.application.dto import PersonDTO, RefDTO, RoleDTO, UserDTO, id_or_raw, parse_id


@pytest.mark.parametrize("value, expected", [
    ("5", 5),
    (" 12 ", 12),
    (3, 3),
    ("", None),
    ("abc", None),
    (None, None),
    (True, None),
])
def test_parse_id(value, expected):
    """Тест разбора ID из строки запроса."""
    assert parse_id(value) == expected


def test_role_from_form_keeps_raw_values():
    role = RoleDTO.from_form(FormData([("id", ""), ("name", "  Admin ")]))

    assert role.id is None
    assert role.name == "  Admin "


def test_person_from_form_deduplicates_roles():
    """Тест: повторяющиеся и некорректные role_ids отбрасываются."""
    form = FormData([
        ("id", "4"),
        ("first_name", "Ivan"),
        ("last_name", "Petrov"),
        ("role_ids", "2"),
        ("role_ids", "1"),
        ("role_ids", "2"),
        ("role_ids", "x"),
    ])

    person = PersonDTO.from_form(form)

    assert person.id == 4
    assert person.middle_name == ""
    assert person.role_ids == [2, 1]
    assert person.display_name == "Ivan Petrov"


def test_user_from_form():
    user = UserDTO.from_form(FormData([("username", "admin"), ("password", "secret")]))

    assert user.id is None
    assert user.display_name == "admin"
    assert user.password == "secret"


def test_assemblers_round_trip_exposed_fields():
    """Тест: ассемблеры не теряют полей, которые видит DTO."""
    role = RoleDTO(id=1, name="Admin", persons=[RefDTO(id=2, name="Ivan Petrov")])
    person = PersonDTO(id=2, first_name="Ivan", last_name="Petrov", roles=[RefDTO(id=1, name="Admin")])
    user = UserDTO(id=3, username="admin", password="hash")

    assert RoleAssembler().to_dto(RoleAssembler().to_entity(role)) == role
    assert PersonAssembler().to_dto(PersonAssembler().to_entity(person)) == person
    assert UserAssembler().to_dto(UserAssembler().to_entity(user)) == user


def test_id_or_raw():
    assert id_or_raw("7") == 7
    assert id_or_raw("abc") == "abc"
