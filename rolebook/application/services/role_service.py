"""
Application Service для ролей.
"""

from typing import List, Optional

from rolebook.application.assemblers import RoleAssembler
from rolebook.application.dto import RoleDTO
from rolebook.application.services.crud_service import CrudService, FailureHooks, FailureKind
from rolebook.application.validation import check_max_length, check_not_empty
from rolebook.domain.entities.role import Role
from rolebook.domain.repositories.repository import IRepository
from rolebook.shared.exceptions.domain_exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    MessageError,
)

MAX_CHARACTERS = 255


def validate_role(role: RoleDTO, max_length: int = MAX_CHARACTERS) -> List[MessageError]:
    """Имя роли обязательно и не длиннее max_length."""
    errors: List[MessageError] = []
    check_not_empty(role.name, "name", errors, "role.data.column.name")
    check_max_length(role.name, "name", errors, max_length, "role.data.column.name")
    return errors


def role_failure_hooks(assembler: RoleAssembler) -> FailureHooks:
    """Перевод ошибок хранилища в сообщения о ролях."""

    def on_duplicate(role: Role, cause) -> DuplicateEntityError:
        return DuplicateEntityError.of(
            "role.validation.message.duplicateEntry", assembler.to_dto(role), role.name
        )

    def on_not_found(role_id, cause) -> EntityNotFoundError:
        return EntityNotFoundError.of("role.validation.message.notFound", RoleDTO(), role_id)

    def on_in_use(role: Role, cause) -> Optional[EntityInUseError]:
        if not role.persons:
            return None
        return EntityInUseError.of(
            "role.validation.message.inUse", assembler.to_dto(role), "; ".join(role.person_names())
        )

    return {
        FailureKind.DUPLICATE: on_duplicate,
        FailureKind.NOT_FOUND: on_not_found,
        FailureKind.IN_USE: on_in_use,
    }


class RoleService(CrudService[Role, RoleDTO]):
    """CRUD ролей."""

    def __init__(self, repository: IRepository[Role], max_length: int = MAX_CHARACTERS):
        assembler = RoleAssembler()
        super().__init__(
            repository=repository,
            assembler=assembler,
            dto_factory=RoleDTO,
            validator=lambda role: validate_role(role, max_length),
            failure_hooks=role_failure_hooks(assembler),
        )
