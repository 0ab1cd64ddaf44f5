# -*- coding: utf-8 -*-
"""
SQLAlchemy Repository реализация для пользователей.
"""

from rolebook.domain.entities.user import User
from rolebook.infrastructure.persistence.base_repository import SqlAlchemyRepository
from rolebook.infrastructure.persistence.models import UserModel


class UserRepositoryImpl(SqlAlchemyRepository[User]):
    """Реализация repository пользователей."""

    model = UserModel
    entity_name = "User"

    async def _fill_model(self, model: UserModel, entity: User) -> None:
        model.username = entity.username
        model.password = entity.password

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            password=model.password,
        )
