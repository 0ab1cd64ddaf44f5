"""
Ассемблеры: преобразование Entity ↔ DTO.

Для полей, которые DTO выставляет наружу, преобразование без потерь.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Sequence, TypeVar

from rolebook.application.dto import PersonDTO, RefDTO, RoleDTO, UserDTO
from rolebook.domain.entities.person import Person
from rolebook.domain.entities.role import Role
from rolebook.domain.entities.user import User
from rolebook.domain.value_objects.entity_ref import EntityRef
from rolebook.domain.value_objects.person_name import PersonName

E = TypeVar("E")
D = TypeVar("D")


def _to_refs(refs: Sequence[RefDTO]) -> List[EntityRef]:
    return [EntityRef(id=ref.id, name=ref.name) for ref in refs]


def _to_ref_dtos(refs: Sequence[EntityRef]) -> List[RefDTO]:
    return [RefDTO(id=ref.id, name=ref.name) for ref in refs]


class Assembler(ABC, Generic[E, D]):
    """Двунаправленный конвертер Entity ↔ DTO."""

    @abstractmethod
    def to_dto(self, entity: E) -> D:
        pass

    @abstractmethod
    def to_entity(self, dto: D) -> E:
        pass

    def to_dtos(self, entities: Sequence[E]) -> List[D]:
        """Список DTO в том же порядке."""
        return [self.to_dto(entity) for entity in entities]


class RoleAssembler(Assembler[Role, RoleDTO]):

    def to_dto(self, entity: Role) -> RoleDTO:
        return RoleDTO(
            id=entity.id,
            name=entity.name,
            persons=_to_ref_dtos(entity.persons),
        )

    def to_entity(self, dto: RoleDTO) -> Role:
        return Role(
            id=dto.id,
            name=dto.name,
            persons=_to_refs(dto.persons),
        )


class PersonAssembler(Assembler[Person, PersonDTO]):

    def to_dto(self, entity: Person) -> PersonDTO:
        return PersonDTO(
            id=entity.id,
            first_name=entity.name.first_name,
            middle_name=entity.name.middle_name or "",
            last_name=entity.name.last_name,
            roles=_to_ref_dtos(entity.roles),
        )

    def to_entity(self, dto: PersonDTO) -> Person:
        return Person(
            id=dto.id,
            name=PersonName(
                first_name=dto.first_name,
                middle_name=dto.middle_name or None,
                last_name=dto.last_name,
            ),
            roles=_to_refs(dto.roles),
        )


class UserAssembler(Assembler[User, UserDTO]):

    def to_dto(self, entity: User) -> UserDTO:
        return UserDTO(id=entity.id, username=entity.username, password=entity.password)

    def to_entity(self, dto: UserDTO) -> User:
        return User(id=dto.id, username=dto.username, password=dto.password)
