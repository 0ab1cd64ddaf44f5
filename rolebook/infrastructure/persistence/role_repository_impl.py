# -*- coding: utf-8 -*-
"""
SQLAlchemy Repository реализация для ролей.
"""

from rolebook.domain.entities.role import Role
from rolebook.domain.value_objects.entity_ref import EntityRef
from rolebook.domain.value_objects.person_name import PersonName
from rolebook.infrastructure.persistence.base_repository import SqlAlchemyRepository
from rolebook.infrastructure.persistence.models import RoleModel


class RoleRepositoryImpl(SqlAlchemyRepository[Role]):
    """
    Реализация repository ролей.

    Список людей роли только читается: назначения меняются через Person.
    """

    model = RoleModel
    entity_name = "Role"

    async def _fill_model(self, model: RoleModel, entity: Role) -> None:
        model.name = entity.name

    def _to_entity(self, model: RoleModel) -> Role:
        return Role(
            id=model.id,
            name=model.name,
            persons=[
                EntityRef(
                    id=person.id,
                    name=str(PersonName(person.first_name, person.last_name, person.middle_name))
                )
                for person in model.persons
            ],
        )
