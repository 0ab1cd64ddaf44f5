"""
Application Service для пользователей.

Пароли хранятся как SHA-256 хэш. Пустой пароль при обновлении
означает "оставить прежний".
"""

from typing import List

from rolebook.application.assemblers import UserAssembler
from rolebook.application.dto import UserDTO
from rolebook.application.services.crud_service import CrudService, FailureHooks, FailureKind
from rolebook.application.validation import check_max_length, check_not_empty
from rolebook.domain.entities.user import User
from rolebook.domain.repositories.repository import IRepository
from rolebook.infrastructure.security.password import sha256_hex
from rolebook.shared.exceptions.domain_exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    MessageError,
)

MAX_CHARACTERS = 255


def validate_user(user: UserDTO, max_length: int = MAX_CHARACTERS) -> List[MessageError]:
    """Логин обязателен и не длиннее max_length."""
    errors: List[MessageError] = []
    check_not_empty(user.username, "username", errors, "user.data.column.username")
    check_max_length(user.username, "username", errors, max_length, "user.data.column.username")
    return errors


def validate_new_user(user: UserDTO) -> List[MessageError]:
    """При создании пароль обязателен; при изменении пустой пароль оставляет прежний."""
    errors: List[MessageError] = []
    check_not_empty(user.password, "password", errors, "user.data.column.password")
    return errors


def user_failure_hooks(assembler: UserAssembler) -> FailureHooks:

    def on_duplicate(user: User, cause) -> DuplicateEntityError:
        target = assembler.to_dto(user).model_copy(update={"password": ""})
        return DuplicateEntityError.of("user.validation.message.duplicateEntry", target, user.username)

    def on_not_found(user_id, cause) -> EntityNotFoundError:
        return EntityNotFoundError.of("user.validation.message.notFound", UserDTO(), user_id)

    return {
        FailureKind.DUPLICATE: on_duplicate,
        FailureKind.NOT_FOUND: on_not_found,
    }


class UserService(CrudService[User, UserDTO]):
    """CRUD пользователей с хэшированием паролей."""

    def __init__(self, repository: IRepository[User], max_length: int = MAX_CHARACTERS):
        assembler = UserAssembler()
        super().__init__(
            repository=repository,
            assembler=assembler,
            dto_factory=UserDTO,
            validator=lambda user: validate_user(user, max_length),
            failure_hooks=user_failure_hooks(assembler),
            create_validator=validate_new_user,
        )

    async def create(self, dto: UserDTO) -> UserDTO:
        """Создать пользователя; пароль сохраняется хэшем."""
        dto = self.for_create(dto)
        self.validate(dto, creating=True)
        return await super().create(dto.model_copy(update={"password": sha256_hex(dto.password)}))

    async def update(self, dto: UserDTO) -> UserDTO:
        """
        Обновить пользователя.

        Пустой пароль — сохранить прежний хэш, иначе захэшировать новый.
        """
        self.validate(dto)
        original = await self._get_entity(dto.id)
        if dto.password:
            password = sha256_hex(dto.password)
        else:
            password = original.password
        return await super().update(dto.model_copy(update={"password": password}))

