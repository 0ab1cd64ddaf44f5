"""
Application Service для людей.
"""

from typing import List

from rolebook.application.assemblers import PersonAssembler
from rolebook.application.dto import PersonDTO
from rolebook.application.services.crud_service import CrudService, FailureHooks, FailureKind
from rolebook.application.validation import check_max_length, check_not_empty
from rolebook.domain.entities.person import Person
from rolebook.domain.repositories.repository import IRepository
from rolebook.shared.exceptions.domain_exceptions import EntityNotFoundError, MessageError
from rolebook.shared.exceptions.infrastructure_exceptions import RecordNotFoundError

MAX_CHARACTERS = 255


def validate_person(person: PersonDTO, max_length: int = MAX_CHARACTERS) -> List[MessageError]:
    """Имя и фамилия обязательны; каждая часть имени не длиннее max_length."""
    errors: List[MessageError] = []
    check_not_empty(person.first_name, "first_name", errors, "person.data.column.firstName")
    check_not_empty(person.last_name, "last_name", errors, "person.data.column.lastName")

    for field, label in (
        ("first_name", "person.data.column.firstName"),
        ("middle_name", "person.data.column.middleName"),
        ("last_name", "person.data.column.lastName"),
    ):
        check_max_length(getattr(person, field), field, errors, max_length, label)
    return errors


def person_failure_hooks() -> FailureHooks:

    def on_not_found(person_id, cause: RecordNotFoundError) -> EntityNotFoundError:
        # назначенная роль исчезла между отображением формы и отправкой
        if getattr(cause, "model", None) == "Role":
            return EntityNotFoundError.of("person.validation.message.roleNotFound", None, cause.record_id)
        return EntityNotFoundError.of("person.validation.message.notFound", PersonDTO(), person_id)

    return {FailureKind.NOT_FOUND: on_not_found}


class PersonService(CrudService[Person, PersonDTO]):
    """CRUD людей."""

    def __init__(self, repository: IRepository[Person], max_length: int = MAX_CHARACTERS):
        super().__init__(
            repository=repository,
            assembler=PersonAssembler(),
            dto_factory=PersonDTO,
            validator=lambda person: validate_person(person, max_length),
            failure_hooks=person_failure_hooks(),
        )
