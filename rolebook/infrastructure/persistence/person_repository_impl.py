# -*- coding: utf-8 -*-
"""
SQLAlchemy Repository реализация для людей.
"""

from sqlalchemy import select

from rolebook.domain.entities.person import Person
from rolebook.domain.value_objects.entity_ref import EntityRef
from rolebook.domain.value_objects.person_name import PersonName
from rolebook.infrastructure.persistence.base_repository import SqlAlchemyRepository
from rolebook.infrastructure.persistence.models import PersonModel, RoleModel
from rolebook.shared.exceptions.infrastructure_exceptions import RecordNotFoundError


class PersonRepositoryImpl(SqlAlchemyRepository[Person]):
    """
    Реализация repository людей.

    Назначенные роли сохраняются в person_roles по их ID.
    """

    model = PersonModel
    entity_name = "Person"

    async def _fill_model(self, model: PersonModel, entity: Person) -> None:
        # сначала роли: при ошибке модель остаётся нетронутой
        roles = await self._load_roles(entity.role_ids)
        model.first_name = entity.name.first_name
        model.middle_name = entity.name.middle_name or None
        model.last_name = entity.name.last_name
        model.roles = roles

    async def _load_roles(self, role_ids):
        """
        Загрузить роли по ID в порядке ID.

        Исключения:
            RecordNotFoundError: Если какой-то роли нет (например, удалена параллельно)
        """
        if not role_ids:
            return []

        result = await self.session.execute(
            select(RoleModel).where(RoleModel.id.in_(role_ids)).order_by(RoleModel.id)
        )
        roles = list(result.scalars().all())

        missing = sorted(set(role_ids) - {role.id for role in roles})
        if missing:
            raise RecordNotFoundError("Role", missing[0])
        return roles

    def _to_entity(self, model: PersonModel) -> Person:
        return Person(
            id=model.id,
            name=PersonName(
                first_name=model.first_name,
                middle_name=model.middle_name,
                last_name=model.last_name,
            ),
            roles=[EntityRef(id=role.id, name=role.name) for role in model.roles],
        )
