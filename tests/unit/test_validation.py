"""
Unit tests для валидации полей.
"""

from rolebook.application.dto import PersonDTO, RoleDTO, UserDTO
from rolebook.application.services.person_service import validate_person
from rolebook.application.services.role_service import validate_role
from rolebook.application.services.user_service import validate_new_user, validate_user
from rolebook.application.validation import MAX_LENGTH, NOT_EMPTY, check_max_length, check_not_empty
from rolebook.shared.exceptions.domain_exceptions import MessageError


def test_check_not_empty():
    errors = []

    assert check_not_empty("Admin", "name", errors, "role.data.column.name") is True
    assert check_not_empty("   ", "name", errors, "role.data.column.name") is False
    assert errors == [MessageError(NOT_EMPTY, ("localize:role.data.column.name",), "name")]


def test_check_max_length_boundary():
    """Тест границы длины: ровно max_length допустимо."""
    errors = []

    assert check_max_length("a" * 255, "name", errors, 255, "role.data.column.name") is True
    assert check_max_length("a" * 256, "name", errors, 255, "role.data.column.name") is False
    assert errors == [MessageError(MAX_LENGTH, ("localize:role.data.column.name", 255), "name")]


def test_validate_role():
    assert validate_role(RoleDTO(name="Admin")) == []
    assert [e.code for e in validate_role(RoleDTO(name=""))] == [NOT_EMPTY]
    assert [e.code for e in validate_role(RoleDTO(name="x" * 300))] == [MAX_LENGTH]


def test_validate_person_collects_all_errors():
    """Тест: все ошибки полей собираются сразу."""
    errors = validate_person(PersonDTO(first_name="", middle_name="m" * 300, last_name=""))

    assert [(e.code, e.field) for e in errors] == [
        (NOT_EMPTY, "first_name"),
        (NOT_EMPTY, "last_name"),
        (MAX_LENGTH, "middle_name"),
    ]


def test_validate_user_password_required_only_on_create():
    """Тест: пароль проверяется только правилом создания, ID на это не влияет."""
    assert [e.field for e in validate_new_user(UserDTO(id=7, username="admin"))] == ["password"]
    assert validate_user(UserDTO(username="admin")) == []
